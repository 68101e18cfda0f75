from .enums import GrantType, Provider
from .grant import Grant

__all__ = ["Grant", "GrantType", "Provider"]
