"""Trust CLI commands for Boardroom."""

import sys
from typing import TYPE_CHECKING

from boardroom.protocols import StorageError
from boardroom.trust import RECOMMENDATION_TEXT, compute_composite_score, recommend

if TYPE_CHECKING:
    from boardroom import Boardroom


def _bar(score: float) -> str:
    pct = int(score * 100)
    return "█" * (pct // 10) + "░" * (10 - pct // 10)


def cmd_trust_list(args, b: "Boardroom") -> int:
    """List every entity in the trust table."""
    try:
        profiles = b.trust.list_profiles()
    except StorageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not profiles:
        print("No trust profiles. Use `boardroom report ... --entity NAME` to build one.")
        return 0

    print(f"Trust profiles ({len(profiles)}):")
    print()
    for entity, profile in profiles:
        composite = compute_composite_score(profile)
        recommendation = recommend(composite)
        print(f"  {entity}")
        print(f"    Composite: [{_bar(composite)}] {composite * 100:.1f}%")
        print(f"    {RECOMMENDATION_TEXT[recommendation]}")
        print(f"    Interactions: {profile.interactions}")
        if profile.last_updated:
            print(f"    Updated: {profile.last_updated}")
        print()
    return 0
