import pytest


class LightLog:
    """
    records actuator calls and engine sleeps in the order they happen.
    """

    def __init__(self):
        self.events = []

    def actuate(self, on):
        self.events.append(('light', on))

    async def sleep(self, secs):
        self.events.append(('sleep', secs))

    def light_calls(self):
        return [value for kind, value in self.events if kind == 'light']

    def sleep_count(self):
        return len([kind for kind, _ in self.events if kind == 'sleep'])

    def pulses(self):
        """
        rebuild (on, units) pulses from the log, one pulse per light call.
        a light call with no sleep after it is not a pulse.
        """
        pulses = []
        for kind, value in self.events:
            if kind == 'light':
                pulses.append([value, 0])
            elif pulses:
                pulses[-1][1] += 1
        return [(on, units) for on, units in pulses if units > 0]


class FakeLight:
    def __init__(self, max_level=1):
        self.max_level = max_level
        self.calls = []
        self.level = 0
        self.closed = False

    def set_state(self, on):
        self.calls.append(('state', on))
        self.level = self.max_level if on else 0

    def set_level(self, level):
        self.calls.append(('level', level))
        self.level = level

    def is_on(self):
        return self.level > 0

    def close(self):
        self.closed = True


@pytest.fixture
def light_log():
    return LightLog()
