"""
Platform configuration.

Environment Variables:
    STATEMENTS_PLATFORM: Platform identity, seeds identifier derivation (required)
    STATEMENTS_PLATFORM_URL: Platform home page (xAPI account homePage, Caliper edApp id)
    STATEMENTS_TRANSPORT: file or s3 - default: file
    (transport-specific variables are read by statements.transport.transport_from_env)
"""

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .errors import StatementError

if TYPE_CHECKING:
    from ..transport.store import StatementTransport


@dataclass(frozen=True)
class PlatformConfig:
    """
    Read-only configuration shared by every statement of a deployment.

    Fields:
        platform: Stable identity of the deployment/tenant
        transport: StatementTransport that receives rendered statements
        platform_url: Optional home page of the platform
    """
    platform: str
    transport: "StatementTransport"
    platform_url: Optional[str] = None

    @staticmethod
    def from_env(transport: Optional["StatementTransport"] = None) -> "PlatformConfig":
        """
        Load configuration from environment variables.

        Args:
            transport: Transport to use (default: built from STATEMENTS_TRANSPORT)

        Raises:
            StatementError: If STATEMENTS_PLATFORM is unset or the transport
                cannot be built
        """
        platform = os.getenv("STATEMENTS_PLATFORM", "").strip()
        if not platform:
            raise StatementError("STATEMENTS_PLATFORM is not set")

        if transport is None:
            from ..transport import transport_from_env

            transport = transport_from_env()

        return PlatformConfig(
            platform=platform,
            transport=transport,
            platform_url=os.getenv("STATEMENTS_PLATFORM_URL") or None,
        )
