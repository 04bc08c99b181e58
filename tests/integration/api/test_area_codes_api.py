# tests/integration/api/test_area_codes_api.py
# -*- coding: utf-8 -*-
"""
Integration tests for the area code endpoints (/api/areacodes).
"""
import json

from didadmin.services.did_service import DidService


def test_list_area_codes_filtered(client):
    response = client.get('/api/areacodes?state=New%20York&sort=code')

    assert response.status_code == 200
    data = json.loads(response.data)
    codes = [item['code'] for item in data['data']]
    assert '212' in codes and '347' in codes
    assert codes == sorted(codes, key=int)
    assert {'totalDIDs', 'activeDIDs', 'timezone', 'region'} <= set(data['data'][0])


def test_create_area_code(client):
    response = client.post('/api/areacodes', json={'code': '999', 'state': 'Nevada'})

    assert response.status_code == 201
    data = json.loads(response.data)['data']
    assert (data['region'], data['timezone']) == ('Nevada Region', 'PST')


def test_create_area_code_validation_and_conflict(client):
    assert client.post('/api/areacodes', json={'code': '12', 'state': 'Ohio'}).status_code == 400
    response = client.post('/api/areacodes', json={'code': '212', 'state': 'New York'})
    assert response.status_code == 409


def test_update_area_code_syncs_dids(client, stores):
    """
    GIVEN a DID in area code 212
    WHEN PATCH /api/areacodes/ac-212 changes the state
    THEN the DID's state follows.
    """
    did = DidService.create_did({'did_number': '12125550100'})

    response = client.patch('/api/areacodes/ac-212', json={'state': 'Gotham'})

    assert response.status_code == 200
    assert stores.dids.get(did.id).state == 'Gotham'


def test_delete_and_missing_area_code(client):
    assert client.delete('/api/areacodes/ac-212').status_code == 200
    assert client.get('/api/areacodes/ac-212').status_code == 404
    assert client.patch('/api/areacodes/ac-212', json={'state': 'x'}).status_code == 404


def test_bulk_replace_syncs_did_states(client, stores):
    """
    GIVEN a DID in area code 212
    WHEN POST /api/areacodes/bulk maps 212 to another state
    THEN the DID state is updated and a later full sync finds nothing to do.
    """
    did = DidService.create_did({'did_number': '12125550100'})
    payload = {'areaCodes': [{'code': '212', 'state': 'Elsewhere'}]}

    response = client.post('/api/areacodes/bulk', json=payload)
    assert json.loads(response.data)['total'] == 1
    assert stores.dids.get(did.id).state == 'Elsewhere'

    response = client.post('/api/areacodes/sync-states')
    assert json.loads(response.data)['data'] == {'updated': 0}


def test_bulk_replace_duplicate_codes(client):
    payload = {'areaCodes': [{'code': '212', 'state': 'A'}, {'code': '212', 'state': 'B'}]}
    assert client.post('/api/areacodes/bulk', json=payload).status_code == 409


def test_recompute_counts(client):
    DidService.create_did({'did_number': '12125550100'})
    DidService.create_did({'did_number': '12125550101', 'status': 'inactive'})

    response = client.post('/api/areacodes/recompute')

    assert response.status_code == 200
    item = next(i for i in json.loads(response.data)['data'] if i['code'] == '212')
    assert (item['totalDIDs'], item['activeDIDs']) == (2, 1)
