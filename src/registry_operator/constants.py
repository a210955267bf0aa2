"""Constants for the Registry Operator."""

# API Group
API_GROUP = "registry-operator.dev"
API_VERSION = "v1alpha1"
API_GROUP_VERSION = f"{API_GROUP}/{API_VERSION}"

# Resource Kinds
KIND_REGISTRY = "Registry"
KIND_POD = "Pod"
KIND_CONFIG_MAP = "ConfigMap"

PLURAL_REGISTRY = "registries"

# Labels
LABEL_APP = "app"
LABEL_APP_VALUE = "registry"
LABEL_REGISTRY_NAME = "registry"

# Finalizers
FINALIZER = f"{API_GROUP}/finalizer"

# Child resources
REGISTRY_IMAGE = "registry:2"
CONFIG_FILE_NAME = "config.yml"
CONFIG_VOLUME_NAME = "config"
CONFIG_MOUNT_PATH = "/etc/distribution"

# Controller name used in structured logs
CONTROLLER_NAME = "registry-operator"

# Event Reasons
EVENT_REASON_RECONCILE_FAILED = "ReconcileFailed"
EVENT_REASON_STORAGE_UNSUPPORTED = "StorageTypeUnsupported"
EVENT_REASON_PHASE_CHANGED = "PhaseChanged"
