# Shared constants and builders for CadetMart tests.
# Created: 2026-10-19

from cadetmart.config import Settings

PASSWORD = "cadet-inventory-pw"
SECRET = "test-signing-secret"
T0 = 1_760_000_000_000  # fixed issuance instant, epoch ms


class FakeClock:
    """Callable clock returning a settable epoch-millisecond value."""

    def __init__(self, now: int = T0):
        self.now = now

    def __call__(self) -> int:
        return self.now


def make_settings(**overrides) -> Settings:
    values = {"inventory_password": PASSWORD, "session_secret": SECRET}
    values.update(overrides)
    return Settings(_env_file=None, **values)
