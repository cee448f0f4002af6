#
# morse code light sender
#
__author__ = 'J. B. Otterson'
__copyright__ = """
Copyright 2022, 2024, 2025 J. B. Otterson N1KDO.
Redistribution and use in source and binary forms, with or without modification, 
are permitted provided that the following conditions are met:
  1. Redistributions of source code must retain the above copyright notice, 
     this list of conditions and the following disclaimer.
  2. Redistributions in binary form must reproduce the above copyright notice, 
     this list of conditions and the following disclaimer in the documentation 
     and/or other materials provided with the distribution.
THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND 
ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED
WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED.
IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT,
INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING,
BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, 
DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE 
OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED
OF THE POSSIBILITY OF SUCH DAMAGE.
"""
__version__ = '0.9.6'  # 2025-12-29

# disable pylint import error
# pylint: disable=E0401

import asyncio
from collections import namedtuple

from flashdim import micro_logging as logging

DEFAULT_UNIT_MS = 200  # the speed of the morse code is set by the dit length of 200 ms.
REPEAT_PAUSE_UNITS = 7

DOT = 1
DASH = 3
SYMBOL_GAP = 1  # inter-element space
LETTER_GAP = 3
WORD_GAP = 7

SYMBOL_UNITS = {'.': DOT, '-': DASH}

MORSE_CODES = {
    'A': '.-',
    'B': '-...',
    'C': '-.-.',
    'D': '-..',
    'E': '.',
    'F': '..-.',
    'G': '--.',
    'H': '....',
    'I': '..',
    'J': '.---',
    'K': '-.-',
    'L': '.-..',
    'M': '--',
    'N': '-.',
    'O': '---',
    'P': '.--.',
    'Q': '--.-',
    'R': '.-.',
    'S': '...',
    'T': '-',
    'U': '..-',
    'V': '...-',
    'W': '.--',
    'X': '-..-',
    'Y': '-.--',
    'Z': '--..',
    '0': '-----',
    '1': '.----',
    '2': '..---',
    '3': '...--',
    '4': '....-',
    '5': '.....',
    '6': '-....',
    '7': '--...',
    '8': '---..',
    '9': '----.',
    '.': '.-.-.-',
    ',': '--..--',
    '?': '..--..',
    "'": '.----.',
    '!': '-.-.--',
    '/': '-..-.',
    '(': '-.--.',
    ')': '-.--.-',
    '&': '.-...',
    ':': '---...',
    ';': '-.-.-.',
    '=': '-...-',
    '+': '.-.-.',
    '-': '-....-',
    '_': '..--.-',
    '"': '.-..-.',
    '$': '...-..-',
    '@': '.--.-.',
}

Pulse = namedtuple('Pulse', ['on', 'units'])


def lookup(character):
    """
    return the dot/dash string for character, or None if there is no code for it.
    space has no code, it is a word break.
    """
    if len(character) != 1:
        return None
    return MORSE_CODES.get(character.upper())


def expand(code):
    """
    expand a dot/dash string into on pulses separated by single unit off pulses.
    there is no trailing gap, spacing between letters belongs to the caller.
    """
    pulses = []
    for symbol in code:
        units = SYMBOL_UNITS.get(symbol)
        if units is None:
            raise ValueError(f'bad morse symbol "{symbol}" in "{code}"')
        if pulses:
            pulses.append(Pulse(False, SYMBOL_GAP))
        pulses.append(Pulse(True, units))
    return pulses


def message_pulses(message):
    """
    generate (letter, pulse) for a whole message, including the letter and word gaps.
    a gap pulse is reported as part of the letter that follows it.
    """
    sent_letter = False
    word_break = False
    for letter in message:
        if letter == ' ':
            word_break = sent_letter
            continue
        code = lookup(letter)
        if code is None:
            continue
        if sent_letter:
            yield letter, Pulse(False, WORD_GAP if word_break else LETTER_GAP)
        for pulse in expand(code):
            yield letter, pulse
        sent_letter = True
        word_break = False


def message_units(message):
    return sum(pulse.units for _, pulse in message_pulses(message))


class MorseCode:
    def __init__(self, unit_ms=DEFAULT_UNIT_MS, repeat_pause_units=REPEAT_PAUSE_UNITS, sleep=None, on_letter=None):
        if isinstance(unit_ms, bool) or not isinstance(unit_ms, (int, float)) or unit_ms <= 0:
            raise ValueError(f'morse unit must be a positive number of milliseconds, not {unit_ms!r}')
        if isinstance(repeat_pause_units, bool) or not isinstance(repeat_pause_units, int) or repeat_pause_units <= 0:
            raise ValueError(f'repeat pause must be a positive number of units, not {repeat_pause_units!r}')
        self.unit_ms = unit_ms
        self.repeat_pause_units = repeat_pause_units
        self.sleep = sleep or asyncio.sleep
        self.on_letter = on_letter
        logging.debug(f'unit {unit_ms} ms, repeat pause {repeat_pause_units} units', 'morse_code:__init__')

    def message_duration_ms(self, message):
        return message_units(message) * self.unit_ms

    async def _sleep_units(self, units, should_continue):
        # sleep one unit at a time so a stop request is seen within a unit.
        unit_secs = self.unit_ms / 1000
        sleep = self.sleep
        for i in range(units):
            if i > 0 and not should_continue():
                return False
            await sleep(unit_secs)
        return True

    async def transmit(self, message, actuate, should_continue):
        """
        flash message once.
        returns when the message is done or should_continue() returns False.
        when cancelled, the light is left as the last actuate() call set it.
        """
        logging.debug(f'starting message "{message}"', 'morse_code:transmit')
        last_letter = None
        light_on = None
        on_letter = self.on_letter
        for letter, pulse in message_pulses(message):
            if not should_continue():
                logging.debug(f'cancelled at letter "{letter}"', 'morse_code:transmit')
                return
            if letter != last_letter:
                last_letter = letter
                if on_letter is not None:
                    on_letter(letter, pulse.on)
            if pulse.on != light_on:
                actuate(pulse.on)
                light_on = pulse.on
            if not await self._sleep_units(pulse.units, should_continue):
                logging.debug(f'cancelled in letter "{letter}"', 'morse_code:transmit')
                return
        if light_on and should_continue():
            actuate(False)
        logging.debug(f'finished message "{message}"', 'morse_code:transmit')

    async def wait_for_repeat(self, should_continue):
        if should_continue():
            await self._sleep_units(self.repeat_pause_units, should_continue)

    async def run(self, message, actuate, should_continue):
        """
        flash message over and over until should_continue() returns False.
        """
        logging.info(f'sending "{message}" until stopped', 'morse_code:run')
        while should_continue():
            await self.transmit(message, actuate, should_continue)
            if should_continue():
                await self.wait_for_repeat(should_continue)
        logging.info(f'stopped sending "{message}"', 'morse_code:run')
