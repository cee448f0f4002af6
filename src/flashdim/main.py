#
# main.py -- flashlight controller: morse code beacon with a tcp control port.
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
__version__ = '0.1.0'

import argparse
import asyncio
import json
import sys

from flashdim import micro_logging as logging
from flashdim.flashlight import Flashlight, FlashlightError, SOS_MESSAGE
from flashdim.lights import PinLight, SerialLight
from flashdim.morse_code import DEFAULT_UNIT_MS, REPEAT_PAUSE_UNITS, MorseCode
from flashdim.utils import milliseconds, safe_int

CONFIG_FILE = 'data/config.json'
DEFAULT_TCP_PORT = 7373
DEFAULT_LED_PIN = 2
MAX_COMMAND_LENGTH = 80

DEFAULT_CONFIG = {
    'light': 'pin',
    'led_pin': DEFAULT_LED_PIN,
    'max_level': 1,
    'serial_port': '',
    'serial_line': 'RTS',
    'unit_ms': DEFAULT_UNIT_MS,
    'repeat_pause_units': REPEAT_PAUSE_UNITS,
    'message': '',
    'tcp_port': DEFAULT_TCP_PORT,
    'log_level': 'INFO',
}


def read_config(filename=CONFIG_FILE):
    config = dict(DEFAULT_CONFIG)
    try:
        with open(filename, 'r') as config_file:
            config.update(json.load(config_file))
    except Exception as ex:
        logging.exception('failed to load configuration, using default...',
                          'main:read_config', exc_info=ex)
    return config


def apply_args(config, args):
    if args.message is not None:
        config['message'] = args.message
    if args.sos:
        config['message'] = SOS_MESSAGE
    if args.serial_port is not None:
        config['light'] = 'serial'
        config['serial_port'] = args.serial_port
    if args.tcp_port is not None:
        config['tcp_port'] = args.tcp_port
    if args.unit_ms is not None:
        config['unit_ms'] = args.unit_ms
    if args.debug:
        config['log_level'] = 'DEBUG'
    return config


def get_tcp_port(config):
    tcp_port = safe_int(config.get('tcp_port') or DEFAULT_TCP_PORT, DEFAULT_TCP_PORT)
    if tcp_port < 0 or tcp_port > 65535:
        logging.warning(f'bad tcp port {tcp_port}, using {DEFAULT_TCP_PORT}', 'main:get_tcp_port')
        tcp_port = DEFAULT_TCP_PORT
    return tcp_port


def make_light(config):
    if config.get('light') == 'serial':
        return SerialLight(config.get('serial_port') or '',
                           use_dtr=str(config.get('serial_line')).upper() == 'DTR')
    return PinLight(safe_int(config.get('led_pin'), DEFAULT_LED_PIN),
                    max_level=safe_int(config.get('max_level'), 1))


def make_flashlight(config):
    # bad timing values are fatal, let the ValueError out.
    morse = MorseCode(unit_ms=safe_int(config.get('unit_ms'), 0),
                      repeat_pause_units=safe_int(config.get('repeat_pause_units'), 0))
    return Flashlight(make_light(config), morse)


def handle_command(flashlight, command):
    """
    run one control command, return the text to send back.
    commands: SOS, MORSE <text>, OFF, MAX, HALF, MIN, LEVEL <n>, STATUS
    MORSE text is sent as given, a ';' in it is part of the message.
    """
    verb, _, arg = command.strip().partition(' ')
    verb = verb.upper()
    if verb != 'MORSE':
        verb = verb.rstrip(';')
        arg = arg.strip().rstrip(';').strip()
    if verb == '':
        return 'ERR empty command'
    try:
        if verb == 'SOS':
            flashlight.sos()
        elif verb == 'MORSE':
            flashlight.start_morse(arg)
        elif verb == 'OFF':
            flashlight.off()
        elif verb == 'MAX':
            flashlight.maximum()
        elif verb == 'HALF':
            flashlight.half()
        elif verb == 'MIN':
            flashlight.minimum()
        elif verb == 'LEVEL':
            level = safe_int(arg, -1)
            if level < 0:
                return f'ERR bad level "{arg}"'
            flashlight.set_level(level)
        elif verb == 'STATUS':
            return json.dumps(flashlight.status())
        else:
            return f'ERR unknown command "{verb}"'
    except FlashlightError as exc:
        return f'ERR {exc}'
    return 'OK'


def is_morse_command(buffer):
    return bytes(buffer[:6]).upper() == b'MORSE '


class ControlServer:
    """
    line oriented control port.  commands end with ';' or CR.
    a MORSE command only ends with CR, ';' is a morse character.
    """

    def __init__(self, flashlight):
        self.flashlight = flashlight

    async def serve_control_client(self, reader, writer):
        t0 = milliseconds()
        partner = writer.get_extra_info('peername')
        logging.info(f'control client connected from {partner}', 'main:serve_control_client')
        buffer = bytearray()
        try:
            while True:
                data = await reader.read(1)
                if not data:
                    break
                b = data[0]
                if b == 13 or (b == ord(';') and not is_morse_command(buffer)):  # command terminator
                    command = buffer.decode('utf-8', errors='replace')
                    buffer = bytearray()
                    if command.strip() == '':
                        continue
                    logging.debug(f'command "{command}"', 'main:serve_control_client')
                    response = handle_command(self.flashlight, command)
                    writer.write((response + '\r\n').encode('utf-8'))
                    await writer.drain()
                elif b != 10:
                    if len(buffer) < MAX_COMMAND_LENGTH:  # anti-gibberish test
                        buffer.append(b)
            writer.close()
            await writer.wait_closed()
        except Exception as exc:
            logging.exception('exception in serve_control_client:', 'main:serve_control_client', exc_info=exc)
        tc = milliseconds()
        logging.info(f'control client disconnected, elapsed time {(tc - t0) / 1000.0:6.3f} seconds',
                     'main:serve_control_client')


async def main(config):
    flashlight = make_flashlight(config)
    try:
        message = config.get('message')
        if message:
            flashlight.start_morse(message)

        tcp_port = get_tcp_port(config)
        control_server = ControlServer(flashlight)
        logging.info(f'Starting control service on port {tcp_port}', 'main:main')
        server = await asyncio.start_server(control_server.serve_control_client, '0.0.0.0', tcp_port)
        async with server:
            await server.serve_forever()
    finally:
        flashlight.off()
        flashlight.light.close()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='flashlight controller and morse code beacon')
    parser.add_argument('--config', default=CONFIG_FILE, help='configuration file')
    parser.add_argument('--message', help='message to send in morse code until stopped')
    parser.add_argument('--sos', action='store_true', help='send SOS until stopped')
    parser.add_argument('--serial-port', help='key the light on this serial port RTS line')
    parser.add_argument('--tcp-port', type=int, help='control port')
    parser.add_argument('--unit-ms', type=int, help='dit length in milliseconds')
    parser.add_argument('--debug', action='store_true', help='debug logging')
    parser.add_argument('--list-ports', action='store_true', help='list serial ports and exit')
    return parser.parse_args(argv)


def get_ports_list():
    # need pyserial to enumerate com ports.
    from serial.tools.list_ports import comports
    return sorted([x.device for x in comports()])


def run(argv=None):
    args = parse_args(argv)
    if args.list_ports:
        for port in get_ports_list():
            print(port)
        return 0
    config = apply_args(read_config(args.config), args)
    logging.set_level(config.get('log_level') or 'INFO')
    logging.info('starting', 'main:run')

    try:
        asyncio.run(main(config))
    except KeyboardInterrupt:
        logging.info('bye', 'main:run')
    except ValueError as exc:
        logging.critical(f'bad configuration: {exc}', 'main:run')
        return 1
    except FlashlightError as exc:
        logging.critical(f'cannot start: {exc}', 'main:run')
        return 1
    logging.info('done', 'main:run')
    return 0


if __name__ == '__main__':
    sys.exit(run())
