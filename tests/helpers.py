"""
Test constants and builders.
"""

CREATOR = "ST1TEST"
AUTHORITY_CONTRACT = "ST2TEST"
OUTSIDER = "ST3FAKE"


def challenge_fields(**overrides):
    """Valid creation arguments, overridable per test."""
    fields = dict(
        name="RecycleWeek",
        description="Recycle 10 items",
        start_time=10,
        duration=100,
        reward_amount=500,
        required_actions=10,
        min_participants=5,
        max_participants=50,
        challenge_type="recycling",
        difficulty=5,
        grace_period=7,
        location="CityX",
        category="weekly",
    )
    fields.update(overrides)
    return fields
