"""Object store backed by the Kubernetes API."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException

from ... import metrics
from ...constants import (
    API_GROUP,
    API_VERSION,
    KIND_CONFIG_MAP,
    KIND_POD,
    KIND_REGISTRY,
    PLURAL_REGISTRY,
)
from ...utils.errors import sanitize_exception
from ...utils.rate_limit import is_rate_limit_error, rate_limit_k8s
from .base import ConflictError, NotFoundError, StoreError, format_label_selector, object_key

logger = logging.getLogger(__name__)

# CoreV1Api method suffix per built-in kind
_CORE_KINDS = {
    KIND_POD: "pod",
    KIND_CONFIG_MAP: "config_map",
}

# Custom resources served by CustomObjectsApi, as (group, version, plural)
_CUSTOM_KINDS = {
    KIND_REGISTRY: (API_GROUP, API_VERSION, PLURAL_REGISTRY),
}

_serializer: client.ApiClient | None = None


def to_dict(obj: Any) -> dict[str, Any]:
    """Convert a kubernetes client model to a camelCase manifest dict."""
    global _serializer
    if isinstance(obj, dict):
        return obj
    if _serializer is None:
        _serializer = client.ApiClient()
    return _serializer.sanitize_for_serialization(obj)


def translate_api_exception(e: ApiException, kind: str, name: str) -> StoreError:
    """Map an ApiException to the store error hierarchy."""
    if e.status == 404:
        return NotFoundError(f"{kind} {name} not found")
    if e.status == 409:
        return ConflictError(f"{kind} {name} conflict: {e.reason}")
    return StoreError(f"{kind} {name}: {sanitize_exception(e)}", status=e.status)


def load_kubernetes_config() -> None:
    """Load in-cluster configuration, falling back to the local kubeconfig."""
    try:
        config.load_incluster_config()
    except config.ConfigException:
        config.load_kube_config()


class KubernetesObjectStore:
    """ObjectStore implementation over CoreV1Api and CustomObjectsApi."""

    def __init__(
        self,
        core_api: client.CoreV1Api | None = None,
        custom_api: client.CustomObjectsApi | None = None,
    ):
        self.core_api = core_api or client.CoreV1Api()
        self.custom_api = custom_api or client.CustomObjectsApi()

    @classmethod
    def from_environment(cls) -> KubernetesObjectStore:
        """Create a store using in-cluster or local kubeconfig credentials."""
        load_kubernetes_config()
        return cls()

    def _call(self, operation: str, kind: str, name: str, fn: Callable[..., Any], /, **kwargs: Any) -> Any:
        """Invoke an API method with rate limiting, metrics and error translation."""
        # Leading parameters are positional-only; API keywords such as name= go to fn
        op_label = f"{operation}_{kind.lower()}"
        start_time = time.time()
        try:
            result = rate_limit_k8s(fn)(**kwargs)
            metrics.api_call_total.labels(api_type="k8s", operation=op_label, result="success").inc()
            return result
        except ApiException as e:
            result_label = "not_found" if e.status == 404 else "error"
            metrics.api_call_total.labels(api_type="k8s", operation=op_label, result=result_label).inc()
            if is_rate_limit_error(e):
                logger.warning(f"Rate limited by the API server during {op_label} for {name}")
            raise translate_api_exception(e, kind, name) from e
        finally:
            duration = time.time() - start_time
            metrics.api_call_duration_seconds.labels(api_type="k8s", operation=op_label).observe(duration)

    def _core_method(self, verb: str, kind: str) -> Callable[..., Any]:
        suffix = _CORE_KINDS.get(kind)
        if suffix is None:
            raise ValueError(f"unsupported kind {kind}")
        return getattr(self.core_api, f"{verb}_namespaced_{suffix}")

    def get(self, kind: str, name: str, namespace: str) -> dict[str, Any]:
        if kind in _CUSTOM_KINDS:
            group, version, plural = _CUSTOM_KINDS[kind]
            return self._call(
                "get", kind, name, self.custom_api.get_namespaced_custom_object,
                group=group, version=version, namespace=namespace, plural=plural, name=name,
            )
        obj = self._call("get", kind, name, self._core_method("read", kind), name=name, namespace=namespace)
        return to_dict(obj)

    def list(
        self,
        kind: str,
        namespace: str,
        label_selector: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        selector = format_label_selector(label_selector)
        kwargs: dict[str, Any] = {"namespace": namespace}
        if selector:
            kwargs["label_selector"] = selector

        if kind in _CUSTOM_KINDS:
            group, version, plural = _CUSTOM_KINDS[kind]
            response = self._call(
                "list", kind, namespace, self.custom_api.list_namespaced_custom_object,
                group=group, version=version, plural=plural, **kwargs,
            )
            return list(response.get("items", []))

        response = self._call("list", kind, namespace, self._core_method("list", kind), **kwargs)
        return [to_dict(item) for item in (response.items or [])]

    def create(self, obj: dict[str, Any]) -> dict[str, Any]:
        kind, namespace, name = object_key(obj)
        if kind in _CUSTOM_KINDS:
            group, version, plural = _CUSTOM_KINDS[kind]
            return self._call(
                "create", kind, name, self.custom_api.create_namespaced_custom_object,
                group=group, version=version, namespace=namespace, plural=plural, body=obj,
            )
        created = self._call("create", kind, name, self._core_method("create", kind), namespace=namespace, body=obj)
        return to_dict(created)

    def update(self, obj: dict[str, Any]) -> dict[str, Any]:
        kind, namespace, name = object_key(obj)
        if kind in _CUSTOM_KINDS:
            group, version, plural = _CUSTOM_KINDS[kind]
            return self._call(
                "update", kind, name, self.custom_api.replace_namespaced_custom_object,
                group=group, version=version, namespace=namespace, plural=plural, name=name, body=obj,
            )
        updated = self._call(
            "update", kind, name, self._core_method("replace", kind), name=name, namespace=namespace, body=obj,
        )
        return to_dict(updated)

    def update_status(self, obj: dict[str, Any]) -> dict[str, Any]:
        kind, namespace, name = object_key(obj)
        if kind in _CUSTOM_KINDS:
            group, version, plural = _CUSTOM_KINDS[kind]
            return self._call(
                "update_status", kind, name, self.custom_api.replace_namespaced_custom_object_status,
                group=group, version=version, namespace=namespace, plural=plural, name=name, body=obj,
            )
        if kind != KIND_POD:
            raise ValueError(f"{kind} has no status subresource")
        updated = self._call(
            "update_status", kind, name, self.core_api.replace_namespaced_pod_status,
            name=name, namespace=namespace, body=obj,
        )
        return to_dict(updated)

    def delete(self, obj: dict[str, Any]) -> None:
        kind, namespace, name = object_key(obj)
        if kind in _CUSTOM_KINDS:
            group, version, plural = _CUSTOM_KINDS[kind]
            self._call(
                "delete", kind, name, self.custom_api.delete_namespaced_custom_object,
                group=group, version=version, namespace=namespace, plural=plural, name=name,
            )
            return
        self._call("delete", kind, name, self._core_method("delete", kind), name=name, namespace=namespace)
