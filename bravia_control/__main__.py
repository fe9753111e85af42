#!/usr/bin/env python3

# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

from __future__ import annotations

import sys
import argparse
import json
import asyncio
import logging

from bravia_control.internal_types import *

from bravia_control import (
    __version__ as pkg_version,
    BraviaClient,
    BraviaClientConfig,
    BraviaDiscovery,
    bravia_connect,
    DEFAULT_DISCOVERY_TIMEOUT,
  )

class CmdExitError(RuntimeError):
    exit_code: int

    def __init__(self, exit_code: int, msg: Optional[str]=None):
        if msg is None:
            msg = f"Command exited with return code {exit_code}"
        super().__init__(msg)
        self.exit_code = exit_code

class ArgparseExitError(CmdExitError):
    pass

class NoExitArgumentParser(argparse.ArgumentParser):
    def exit(self, status=0, message=None):
        if message:
            self._print_message(message, sys.stderr)
        raise ArgparseExitError(status, message)

class CommandHandler:
    _argv: Optional[Sequence[str]]
    _parser: argparse.ArgumentParser
    _args: argparse.Namespace
    _provide_traceback: bool = True

    def __init__(self, argv: Optional[Sequence[str]]=None):
        self._argv = argv

    def pretty_print(self, value: Jsonable) -> None:
        print(json.dumps(value, indent=2, sort_keys=True))

    def get_config(self) -> BraviaClientConfig:
        return BraviaClientConfig(
            default_host=self._args.host,
            psk=self._args.psk,
            timeout_secs=self._args.timeout,
          )

    async def connect(self) -> BraviaClient:
        return await bravia_connect(config=self.get_config())

    async def cmd_bare(self) -> int:
        print("A command is required", file=sys.stderr)
        return 1

    async def cmd_discover(self) -> int:
        discovery = BraviaDiscovery(
            timeout_secs=self._args.wait_time,
            isolate_failures=not self._args.strict,
          )
        devices = await discovery.scan()
        self.pretty_print([ device.to_jsonable() for device in devices ])
        return 0

    async def cmd_send(self) -> int:
        commands: List[str] = self._args.commands
        async with await self.connect() as client:
            await client.send_commands(commands)
        return 0

    async def cmd_power(self) -> int:
        state: Optional[str] = self._args.state
        async with await self.connect() as client:
            if state is not None:
                await client.set_power_state(state == 'on')
            status = await client.get_power_state()
        self.pretty_print(dict(status=status))
        return 0

    async def cmd_info(self) -> int:
        async with await self.connect() as client:
            if self._args.raw:
                self.pretty_print(await client.get_interface_information())
            else:
                self.pretty_print(dict(device_info=await client.get_device_info()))
        return 0

    async def cmd_playing(self) -> int:
        async with await self.connect() as client:
            title = await client.get_playback_info()
        self.pretty_print(dict(title=title))
        return 0

    async def cmd_apps(self) -> int:
        async with await self.connect() as client:
            apps = await client.list_applications()
        self.pretty_print(apps)
        return 0

    async def cmd_launch(self) -> int:
        uri: str = self._args.uri
        async with await self.connect() as client:
            await client.launch_application(uri)
        return 0

    async def cmd_codes(self) -> int:
        async with await self.connect() as client:
            codes = await client.get_ircc_codes()
        self.pretty_print([ code.to_jsonable() for code in codes ])
        return 0

    async def cmd_version(self) -> int:
        print(pkg_version)
        return 0

    async def arun(self) -> int:
        """Run the bravia-control command-line tool with provided arguments

        Args:
            argv (Optional[Sequence[str]], optional):
                A list of commandline arguments (NOT including the program as argv[0]!),
                or None to use sys.argv[1:]. Defaults to None.

        Returns:
            int: The exit code that would be returned if this were run as a standalone command.
        """
        parser = NoExitArgumentParser(description="Control a Sony BRAVIA TV.")


        # ======================= Main command

        self._parser = parser
        parser.add_argument('--traceback', "--tb", action='store_true', default=False,
                            help='Display detailed exception information')
        parser.add_argument('--log-level', dest='log_level', default='warning',
                            choices=['debug', 'info', 'warning', 'error', 'critical'],
                            help='''The logging level to use. Default: warning''')
        parser.add_argument('-H', '--host', default=None,
                            help='''The TV host: "<host>[:<port>]", "http://<host>[:<port>]", "ssdp://" or "ssdp://<name>".
                                    Default: $BRAVIA_HOST, or "ssdp://"''')
        parser.add_argument('--psk', default=None,
                            help='''The pre-shared key configured on the TV. Default: $BRAVIA_PSK, or "0000"''')
        parser.add_argument('--timeout', type=float, default=None,
                            help='''The timeout for each request, in seconds. Default: $BRAVIA_TIMEOUT, or 5''')
        parser.set_defaults(func=self.cmd_bare)

        subparsers = parser.add_subparsers(
                            title='Commands',
                            description='Valid commands',
                            help='Additional help available with "<command-name> -h"')

        # ======================= discover

        parser_discover = subparsers.add_parser('discover', description="Find BRAVIA TVs on the local network with SSDP")
        parser_discover.add_argument('--wait-time', type=float, default=DEFAULT_DISCOVERY_TIMEOUT,
                            help=f'''The amount of time to wait for responses, in seconds. Default: {DEFAULT_DISCOVERY_TIMEOUT}''')
        parser_discover.add_argument('--strict', action='store_true', default=False,
                            help='Fail if any responder\'s device descriptor cannot be read. Default: skip it')
        parser_discover.set_defaults(func=self.cmd_discover)

        # ======================= send

        parser_send = subparsers.add_parser('send', description="Send remote control commands, by name (e.g. VolumeUp) or IRCC code")
        parser_send.add_argument('commands', nargs='+',
                            help='The commands to send, in order')
        parser_send.set_defaults(func=self.cmd_send)

        # ======================= power

        parser_power = subparsers.add_parser('power', description="Show or set the power status")
        parser_power.add_argument('state', nargs='?', default=None, choices=['on', 'off'],
                            help='Turn the TV on or to standby. If omitted, only show the status')
        parser_power.set_defaults(func=self.cmd_power)

        # ======================= info

        parser_info = subparsers.add_parser('info', description="Show the model and interface version")
        parser_info.add_argument('--raw', action='store_true', default=False,
                            help='Show the full interface information')
        parser_info.set_defaults(func=self.cmd_info)

        # ======================= playing

        parser_playing = subparsers.add_parser('playing', description="Show the title of the content being played")
        parser_playing.set_defaults(func=self.cmd_playing)

        # ======================= apps

        parser_apps = subparsers.add_parser('apps', description="List installed applications")
        parser_apps.set_defaults(func=self.cmd_apps)

        # ======================= launch

        parser_launch = subparsers.add_parser('launch', description="Launch an application by URI")
        parser_launch.add_argument('uri', help='The application URI, as listed by "apps"')
        parser_launch.set_defaults(func=self.cmd_launch)

        # ======================= codes

        parser_codes = subparsers.add_parser('codes', description="List the TV's remote control command names and IRCC codes")
        parser_codes.set_defaults(func=self.cmd_codes)

        # ======================= version

        parser_version = subparsers.add_parser('version',
                                description='''Display version information.''')
        parser_version.set_defaults(func=self.cmd_version)

        # =========================================================

        try:
            args = parser.parse_args(self._argv)
        except ArgparseExitError as ex:
            return ex.exit_code
        traceback: bool = args.traceback
        self._provide_traceback = traceback

        try:
            logging.basicConfig(
                level=logging.getLevelName(args.log_level.upper()),
            )
            self._args = args
            func: Callable[[], Awaitable[int]] = args.func
            logging.debug(f"Running command {func.__name__}, tb = {traceback}")
            rc = await func()
            logging.debug(f"Command {func.__name__} returned {rc}")
        except Exception as ex:
            if isinstance(ex, CmdExitError):
                rc = ex.exit_code
            else:
                rc = 1
            if rc != 0:
                if traceback:
                    raise
            print(f"bravia-control: error: {ex}", file=sys.stderr)
        except BaseException as ex:
            print(f"bravia-control: Unhandled exception: {ex}", file=sys.stderr)
            raise

        return rc

    def run(self) -> int:
        loop = asyncio.new_event_loop()
        try:
            asyncio.set_event_loop(loop)
            rc = loop.run_until_complete(self.arun())
        finally:
            loop.close()
        return rc

def run(argv: Optional[Sequence[str]]=None) -> int:
    try:
        rc = CommandHandler(argv).run()
    except CmdExitError as ex:
        rc = ex.exit_code
    return rc

async def arun(argv: Optional[Sequence[str]]=None) -> int:
    try:
        rc = await CommandHandler(argv).arun()
    except CmdExitError as ex:
        rc = ex.exit_code
    return rc

# allow running with "python3 -m", or as a standalone script
if __name__ == "__main__":
    sys.exit(run())
