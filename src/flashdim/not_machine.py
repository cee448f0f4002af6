#
# not_machine -- mock micropython machine implementation
#

__author__ = 'J. B. Otterson'
__copyright__ = 'Copyright 2024 J. B. Otterson N1KDO.'
__version__ = '0.0.2'

#
# Copyright 2024 J. B. Otterson N1KDO.
#
# Redistribution and use in source and binary forms, with or without modification,
# are permitted provided that the following conditions are met:
#
#  1. Redistributions of source code must retain the above copyright notice,
#     this list of conditions and the following disclaimer.
#  2. Redistributions in binary form must reproduce the above copyright notice,
#     this list of conditions and the following disclaimer in the documentation
#     and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND
# ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED
# WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED.
# IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT,
# INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING,
# BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE,
# DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE
# OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED
# OF THE POSSIBILITY OF SUCH DAMAGE.

from flashdim import micro_logging as logging


class Machine(object):
    """
    fake micropython Machine, lets the flashlight run on a desktop.
    pin and pwm changes are logged at debug level instead of lighting anything.
    """

    class Pin(object):
        OUT = 1

        def __init__(self, name, options=0, value=0):
            self._value = 1 if value else 0
            self.name = name
            self.options = options

        def value(self, new_value=None) -> int:
            if new_value is not None:
                self._value = 1 if new_value else 0
                logging.debug(f'pin {self.name} = {self._value}', 'not_machine:Pin:value')
            return self._value

    class PWM(object):
        def __init__(self, pin, freq=1000, duty_u16=0):
            self.pin = pin
            self._freq = freq
            self._duty = duty_u16

        def freq(self, f:int=None) -> int:
            if f is not None:
                self._freq = f
            return self._freq

        def duty_u16(self, duty:int=None) -> int:
            if duty is not None:
                self._duty = duty
                logging.debug(f'pwm {self.pin.name} duty = {duty}', 'not_machine:PWM:duty_u16')
            return self._duty

        def deinit(self):
            self._duty = 0


machine = Machine()
