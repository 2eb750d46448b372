"""
Remote operation layer: requests, transport, response unwrapping and the
typed control plane client.
"""
from .client import PlatformClient
from .envelope import RemoteEnvelope
from .request import OperationKind, OperationRequest
from .transport import TransportClient
from .unwrap import unwrap, unwrap_as, unwrap_list_as

__all__ = [
    "PlatformClient",
    "RemoteEnvelope",
    "OperationKind",
    "OperationRequest",
    "TransportClient",
    "unwrap",
    "unwrap_as",
    "unwrap_list_as",
]
