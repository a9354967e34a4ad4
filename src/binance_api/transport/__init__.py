from .structs import HTTPMethod, RateLimitUsage
from .encoder import encode_request, encode_pairs, stringify
from .signer import Signer, get_timestamp_ms, DEFAULT_RECV_WINDOW
from .rest_client import RestClient, AiohttpRestClient, create_rest_client

__all__ = [
    "HTTPMethod",
    "RateLimitUsage",
    "encode_request",
    "encode_pairs",
    "stringify",
    "Signer",
    "get_timestamp_ms",
    "DEFAULT_RECV_WINDOW",
    "RestClient",
    "AiohttpRestClient",
    "create_rest_client",
]
