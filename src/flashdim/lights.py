#
# lights -- the things that make light.
# a gpio pin (optionally dimmed with pwm) or the RTS/DTR line of a serial port.
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
__version__ = '0.9.0'

# disable pylint import error
# pylint: disable=E0401

from flashdim import micro_logging as logging
from flashdim.utils import clamp, upython

if upython:
    import machine
else:
    import serial
    from flashdim.not_machine import machine

PWM_FREQUENCY = 1000
PWM_FULL_SCALE = 65535


class PinLight:
    """
    a light on a gpio pin. when max_level > 1 the pin is driven by pwm
    and set_level() picks a duty cycle of level / max_level.
    """

    def __init__(self, pin=2, max_level=1):
        self.max_level = max(1, max_level)
        self.level = 0
        self.pin = machine.Pin(pin, machine.Pin.OUT, value=0)
        if self.max_level > 1:
            self.pwm = machine.PWM(self.pin)
            self.pwm.freq(PWM_FREQUENCY)
            self.pwm.duty_u16(0)
        else:
            self.pwm = None

    def set_state(self, on):
        self.set_level(self.max_level if on else 0)

    def set_level(self, level):
        level = clamp(level, 0, self.max_level)
        if self.pwm is not None:
            self.pwm.duty_u16(PWM_FULL_SCALE * level // self.max_level)
        else:
            self.pin.value(1 if level else 0)
        self.level = level

    def is_on(self):
        return self.level > 0

    def close(self):
        self.set_level(0)
        if self.pwm is not None:
            self.pwm.deinit()


class SerialLight:
    """
    a light keyed by a serial port control line, like a cw keying interface.
    only has on and off.
    """
    max_level = 1

    def __init__(self, name='', use_dtr=False):
        if upython:
            raise RuntimeError('serial port lights need pyserial.')
        if name == '':
            name = 'com1:'
        self.use_dtr = use_dtr
        self.level = 0
        self.port = serial.Serial()
        self.port.port = name
        # keep the line low while the port opens
        self.port.rts = False
        self.port.dtr = False
        self.port.open()
        logging.info(f'keying {"DTR" if use_dtr else "RTS"} on {name}', 'lights:SerialLight:__init__')

    def set_state(self, on):
        if self.use_dtr:
            self.port.dtr = bool(on)
        else:
            self.port.rts = bool(on)
        self.level = 1 if on else 0

    def set_level(self, level):
        self.set_state(level > 0)

    def is_on(self):
        return self.level > 0

    def close(self):
        self.set_state(False)
        self.port.close()
