#
# flashlight -- levels, off, and morse code sessions for one light.
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
__version__ = '0.9.1'

import asyncio

from flashdim import micro_logging as logging
from flashdim.morse_code import MorseCode, message_units

IDLE_DISPLAY = 'Quick Actions'
SOS_MESSAGE = 'SOS'


class FlashlightError(Exception):
    pass


class Flashlight:
    """
    the flashlight owns the on_letter hook of its morse sender to keep the
    display current. a hook already set on the sender is still called.
    """

    def __init__(self, light, morse=None):
        self.light = light
        self.morse = morse or MorseCode()
        self._letter_hook = self.morse.on_letter
        self.morse.on_letter = self._show_letter
        self.max_level = light.max_level
        self.current_level = 0
        self.morse_active = False
        self.morse_message = None
        self.morse_task = None
        self._session = 0
        self.display = IDLE_DISPLAY
        self.light.set_level(0)
        if not self.dim_allowed():
            logging.info('light only supports 1 level, dim feature deactivated', 'flashlight:__init__')

    def dim_allowed(self):
        return self.max_level > 1

    def _check_not_sending(self):
        if self.morse_active:
            raise FlashlightError('light is busy sending morse code')

    def _send_level(self, level):
        if self.current_level != level:
            self.light.set_level(level)
            self.current_level = level

    def set_level(self, level):
        self._check_not_sending()
        if level < 0:
            raise FlashlightError(f'bad light level {level}')
        if level > 0 and not self.dim_allowed():
            raise FlashlightError('light does not support dimming')
        level = min(level, self.max_level)
        logging.debug(f'light level {level} / {self.max_level}', 'flashlight:set_level')
        self._send_level(level)
        return level

    def maximum(self):
        self._check_not_sending()
        if self.dim_allowed():
            return self.set_level(self.max_level)
        self.light.set_state(True)
        self.current_level = self.max_level
        return self.max_level

    def half(self):
        if not self.dim_allowed():
            raise FlashlightError('light does not support dimming')
        return self.set_level(self.max_level // 2)

    def minimum(self):
        return self.set_level(1)

    def off(self):
        """
        turn the light off. also stops any morse code being sent.
        """
        if self.morse_active:
            logging.info('stopping morse code', 'flashlight:off')
        self.morse_active = False
        self.light.set_state(False)
        self.current_level = 0

    def _actuate(self, on):
        self.light.set_state(on)

    def _show_letter(self, letter, on):
        self.display = f'Morse: {letter}'
        if self._letter_hook is not None:
            self._letter_hook(letter, on)

    def sos(self):
        return self.start_morse(SOS_MESSAGE)

    def start_morse(self, message):
        """
        start flashing message over and over until off() is called.
        returns the asyncio task doing the sending.
        """
        if self.morse_active:
            raise FlashlightError('already sending morse code')
        if message_units(message) == 0:
            raise FlashlightError(f'nothing to send in "{message}"')
        self.morse_active = True
        self.morse_message = message
        self._session += 1
        self.light.set_state(False)
        self.current_level = 0
        self.morse_task = asyncio.create_task(self._morse_session(message, self._session))
        return self.morse_task

    async def _morse_session(self, message, session):
        def keep_sending():
            return self.morse_active and self._session == session

        try:
            await self.morse.run(message, self._actuate, keep_sending)
        finally:
            if self._session == session:
                # the engine leaves the light as it was when cancelled
                self.light.set_state(False)
                self.current_level = 0
                self.morse_active = False
                self.morse_message = None
                self.display = IDLE_DISPLAY

    def status(self):
        return {
            'level': self.current_level,
            'max_level': self.max_level,
            'dim_allowed': self.dim_allowed(),
            'morse_active': self.morse_active,
            'morse_message': self.morse_message,
            'display': self.display,
        }
