import asyncio

import pytest

from flashdim.morse_code import (DASH, DOT, LETTER_GAP, MORSE_CODES, WORD_GAP, MorseCode, Pulse, expand,
                                 lookup, message_pulses, message_units)

ON, OFF = True, False


def always():
    return True


def pulses_of(message):
    return [tuple(pulse) for _, pulse in message_pulses(message)]


def test_lookup_is_case_insensitive():
    assert lookup('s') == '...'
    assert lookup('S') == '...'
    assert lookup('q') == '--.-'
    assert lookup('7') == '--...'


def test_lookup_has_no_code_for_space_or_unknown():
    assert lookup(' ') is None
    assert lookup('#') is None
    assert lookup('é') is None
    assert lookup('') is None
    assert lookup('AB') is None


def test_table_covers_letters_and_digits():
    for c in 'ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789':
        assert set(MORSE_CODES[c]) <= {'.', '-'}


def test_expand_separates_symbols_with_one_unit():
    assert expand('.-') == [Pulse(ON, DOT), Pulse(OFF, 1), Pulse(ON, DASH)]
    assert expand('.') == [Pulse(ON, DOT)]


def test_expand_rejects_bad_symbols():
    with pytest.raises(ValueError):
        expand('.x-')


@pytest.mark.parametrize('character', sorted(MORSE_CODES))
def test_expanded_length_matches_symbols_plus_gaps(character):
    code = lookup(character)
    pulses = expand(code)
    symbol_units = sum(DOT if s == '.' else DASH for s in code)
    assert sum(p.units for p in pulses) == symbol_units + (len(code) - 1)
    assert pulses[0].on and pulses[-1].on
    for first, second in zip(pulses, pulses[1:]):
        assert first.on != second.on
        assert first.units > 0


def test_sos_pulse_stream():
    dots = [(ON, 1), (OFF, 1), (ON, 1), (OFF, 1), (ON, 1)]
    dashes = [(ON, 3), (OFF, 1), (ON, 3), (OFF, 1), (ON, 3)]
    assert pulses_of('SOS') == dots + [(OFF, LETTER_GAP)] + dashes + [(OFF, LETTER_GAP)] + dots


def test_space_makes_a_word_gap():
    assert pulses_of('E E') == [(ON, 1), (OFF, WORD_GAP), (ON, 1)]


def test_spaces_do_not_stack():
    assert pulses_of('E   E') == [(ON, 1), (OFF, WORD_GAP), (ON, 1)]


def test_leading_and_trailing_spaces_send_nothing():
    assert pulses_of('  E  ') == [(ON, 1)]


def test_unsupported_characters_are_skipped():
    assert pulses_of('E#E') == [(ON, 1), (OFF, LETTER_GAP), (ON, 1)]
    assert pulses_of('E # E') == [(ON, 1), (OFF, WORD_GAP), (ON, 1)]
    assert pulses_of('###') == []


def test_gap_belongs_to_following_letter():
    letters = [letter for letter, _ in message_pulses('ET')]
    assert letters == ['E', 'T', 'T']


def test_message_units():
    assert message_units('') == 0
    assert message_units('E') == 1
    assert message_units('SOS') == 5 + 3 + 11 + 3 + 5
    assert MorseCode(unit_ms=100).message_duration_ms('E E') == 900


@pytest.mark.parametrize('unit_ms', [0, -200, None, '200', True])
def test_bad_unit_fails_at_construction(unit_ms):
    with pytest.raises(ValueError):
        MorseCode(unit_ms=unit_ms)


def test_bad_repeat_pause_fails_at_construction():
    with pytest.raises(ValueError):
        MorseCode(repeat_pause_units=0)
    with pytest.raises(ValueError):
        MorseCode(repeat_pause_units=True)


def test_transmit_sos(light_log):
    morse = MorseCode(unit_ms=100, sleep=light_log.sleep)
    asyncio.run(morse.transmit('SOS', light_log.actuate, always))
    assert light_log.pulses() == pulses_of('SOS')
    # light is turned off once the message is done
    assert light_log.light_calls()[-1] is False
    assert all(secs == 0.1 for kind, secs in light_log.events if kind == 'sleep')


def test_transmit_empty_message_does_nothing(light_log):
    morse = MorseCode(sleep=light_log.sleep)
    asyncio.run(morse.transmit('', light_log.actuate, always))
    assert light_log.events == []


def test_light_calls_alternate(light_log):
    morse = MorseCode(sleep=light_log.sleep)

    async def twice():
        await morse.transmit('HELLO WORLD 73', light_log.actuate, always)
        await morse.wait_for_repeat(always)
        await morse.transmit('HELLO WORLD 73', light_log.actuate, always)

    asyncio.run(twice())
    calls = light_log.light_calls()
    assert calls[0] is True
    for first, second in zip(calls, calls[1:]):
        assert first != second


def test_cancel_after_second_pulse(light_log):
    morse = MorseCode(sleep=light_log.sleep)

    def keep_going():
        return len(light_log.light_calls()) < 2

    asyncio.run(morse.transmit('0', light_log.actuate, keep_going))
    assert light_log.light_calls() == [True, False]
    assert light_log.pulses() == [(ON, 3), (OFF, 1)]


def test_cancel_inside_a_dash_stops_within_a_unit(light_log):
    morse = MorseCode(sleep=light_log.sleep)

    def keep_going():
        return light_log.sleep_count() < 1

    asyncio.run(morse.transmit('T', light_log.actuate, keep_going))
    # light left on, the caller turns it off
    assert light_log.light_calls() == [True]
    assert light_log.sleep_count() == 1


def test_cancel_before_start(light_log):
    morse = MorseCode(sleep=light_log.sleep)
    asyncio.run(morse.transmit('SOS', light_log.actuate, lambda: False))
    assert light_log.events == []


def test_letter_notifications_only_on_change(light_log):
    seen = []
    morse = MorseCode(sleep=light_log.sleep, on_letter=lambda letter, on: seen.append((letter, on)))
    asyncio.run(morse.transmit('SOS', light_log.actuate, always))
    assert seen == [('S', True), ('O', False), ('S', False)]


def test_repeat_separates_identical_streams(light_log):
    morse = MorseCode(unit_ms=100, repeat_pause_units=7, sleep=light_log.sleep)
    units = message_units('SOS')

    async def twice():
        await morse.transmit('SOS', light_log.actuate, always)
        first = list(light_log.events)
        await morse.wait_for_repeat(always)
        pause = light_log.sleep_count() - units
        await morse.transmit('SOS', light_log.actuate, always)
        return first, pause

    first, pause = asyncio.run(twice())
    assert pause == 7
    second = light_log.events[len(first) + 7:]
    assert second == first
    assert light_log.sleep_count() == 2 * units + 7


def test_wait_for_repeat_is_interruptible(light_log):
    morse = MorseCode(repeat_pause_units=7, sleep=light_log.sleep)

    def keep_going():
        return light_log.sleep_count() < 3

    asyncio.run(morse.wait_for_repeat(keep_going))
    assert light_log.sleep_count() == 3
    assert light_log.light_calls() == []


def test_wait_for_repeat_skipped_when_stopped(light_log):
    morse = MorseCode(sleep=light_log.sleep)
    asyncio.run(morse.wait_for_repeat(lambda: False))
    assert light_log.events == []


def test_run_repeats_until_stopped(light_log):
    morse = MorseCode(repeat_pause_units=7, sleep=light_log.sleep)
    units = message_units('E')

    def keep_going():
        return light_log.sleep_count() < 3 * (units + 7)

    asyncio.run(morse.run('E', light_log.actuate, keep_going))
    assert light_log.light_calls() == [True, False] * 3
