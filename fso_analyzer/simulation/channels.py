"""
Per-user channel breakdown of the multiplexing hub.

Users are spread over orbital angular momentum (OAM) beams, one beam per mode
L, several users per beam separated by prime codes. The achievable link
throughput is shared evenly between all users.
"""

from dataclasses import dataclass, asdict
from typing import Dict, List, Optional

from .core import LinkConfig, LinkStats, DEFAULT_LINK_CONFIG

# Display colour of each OAM beam, indexed by mode L
BEAM_COLORS = (
    "#ef4444",  # Red (L=0)
    "#3b82f6",  # Blue (L=1)
    "#22c55e",  # Green (L=2)
    "#a855f7",  # Purple (L=3)
)

SPREADING_CODE = "PV-Prime Velocity"


@dataclass(frozen=True)
class UserChannel:
    """One user's slice of the link."""
    user_index: int
    oam_mode: int
    code: str
    base_rate_gbps: float
    effective_rate_gbps: float
    beam_color: str

    @property
    def user_number(self) -> int:
        """1-based number shown to users."""
        return self.user_index + 1

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return asdict(self)


def user_channel(stats: LinkStats, user_index: int, config: Optional[LinkConfig] = None) -> UserChannel:
    """
    Describe a single user channel.

    Args:
        stats: Link evaluation result
        user_index: 0-based user index
        config: System constants

    Returns:
        UserChannel for the requested user
    """
    config = config or DEFAULT_LINK_CONFIG
    if not 0 <= user_index < config.total_users:
        raise ValueError(f"User index must be in [0, {config.total_users}), got {user_index}")

    oam_mode = user_index // config.users_per_beam
    return UserChannel(
        user_index=user_index,
        oam_mode=oam_mode,
        code=SPREADING_CODE,
        base_rate_gbps=config.base_user_rate_gbps,
        effective_rate_gbps=stats.current_throughput_gbps / config.total_users,
        beam_color=BEAM_COLORS[oam_mode % len(BEAM_COLORS)],
    )


def channel_breakdown(stats: LinkStats, config: Optional[LinkConfig] = None) -> List[UserChannel]:
    """Describe every user channel, ordered by user index."""
    config = config or DEFAULT_LINK_CONFIG
    return [user_channel(stats, i, config) for i in range(config.total_users)]
