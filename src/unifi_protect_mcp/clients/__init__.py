"""HTTP clients for the UniFi Protect and Network REST APIs."""

from .base import AuthScheme, Envelope, UnifiBaseClient
from .network import NetworkClient
from .protect import ProtectClient

__all__ = ['AuthScheme', 'Envelope', 'UnifiBaseClient', 'NetworkClient', 'ProtectClient']
