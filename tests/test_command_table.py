#!/usr/bin/env python3
''' test the lazily fetched IRCC command table '''

import pytest

from bravia_control.client import IrccCommandTable
from bravia_control.exceptions import UnknownCommandError, MissingResultError, HttpStatusError


@pytest.mark.asyncio
async def test_literal_code_never_fetches(transport):
    ''' a literal code resolves to itself without touching the TV '''
    table = IrccCommandTable(transport)
    assert await table.resolve('AAAAAQAAAAEAAAAvAw==') == 'AAAAAQAAAAEAAAAvAw=='
    assert transport.calls == []
    assert not table.is_loaded


@pytest.mark.asyncio
async def test_names_fetch_table_once(transport):
    ''' the table is fetched on the first name and reused afterwards '''
    table = IrccCommandTable(transport)
    assert await table.resolve('VolumeUp') == 'AAAAAQAAAAEAAAASAw=='
    assert await table.resolve('Mute') == 'AAAAAQAAAAEAAAAUAw=='
    assert await table.resolve('VolumeUp') == 'AAAAAQAAAAEAAAASAw=='
    assert transport.count('getRemoteControllerInfo') == 1
    assert transport.calls[0].namespace.value == 'system'


@pytest.mark.asyncio
async def test_unknown_name_raises(transport):
    table = IrccCommandTable(transport)
    with pytest.raises(UnknownCommandError) as excinfo:
        await table.resolve('SelfDestruct')
    assert excinfo.value.name == 'SelfDestruct'
    assert str(excinfo.value) == 'Unknown IRCC code SelfDestruct.'


@pytest.mark.asyncio
async def test_names_are_case_sensitive(transport):
    table = IrccCommandTable(transport)
    with pytest.raises(UnknownCommandError):
        await table.resolve('volumeup')


@pytest.mark.asyncio
async def test_get_codes_returns_table(transport):
    table = IrccCommandTable(transport)
    codes = await table.get_codes()
    assert [code.name for code in codes] == ['PowerOff', 'VolumeUp', 'VolumeDown', 'Mute', 'Home']
    await table.get_codes()
    assert transport.count('getRemoteControllerInfo') == 1


@pytest.mark.asyncio
async def test_missing_result_raises(transport):
    transport.respond('system', 'getRemoteControllerInfo', {'id': 1337})
    table = IrccCommandTable(transport)
    with pytest.raises(MissingResultError) as excinfo:
        await table.resolve('Mute')
    assert excinfo.value.operation == 'getRemoteControllerInfo'


@pytest.mark.asyncio
async def test_fetch_failure_propagates_and_is_not_cached(transport):
    ''' a failed fetch leaves the table empty so a later resolve retries '''
    transport.fail_call('system', 'getRemoteControllerInfo', HttpStatusError('getRemoteControllerInfo', 503))
    table = IrccCommandTable(transport)
    with pytest.raises(HttpStatusError):
        await table.resolve('Mute')
    assert not table.is_loaded
