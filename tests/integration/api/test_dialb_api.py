# tests/integration/api/test_dialb_api.py
# -*- coding: utf-8 -*-
"""
Integration tests for the DialB endpoints (/api/dialb).
"""
import json


def create_record(client, **payload):
    response = client.post('/api/dialb', json={'phoneNumber': '2125550100', **payload})
    assert response.status_code == 201
    return json.loads(response.data)['data']


def test_create_and_list(client):
    record = create_record(client, overallStatus='Spam', tMobileFlag=True, group='G1')
    assert record['overallStatus'] == 'Spam'
    assert record['createdAt'] is not None

    response = client.get('/api/dialb?overallStatus=Spam')
    data = json.loads(response.data)
    assert data['total'] == 1
    assert data['data'][0]['tMobileFlag'] is True


def test_invalid_status_rejected(client):
    response = client.post('/api/dialb', json={'phoneNumber': '1', 'overallStatus': 'Bad'})
    assert response.status_code == 400


def test_update_delete_and_404(client):
    record = create_record(client)

    response = client.patch(f"/api/dialb/{record['id']}", json={'attFlag': True})
    assert json.loads(response.data)['data']['attFlag'] is True

    assert client.delete(f"/api/dialb/{record['id']}").status_code == 200
    assert client.get(f"/api/dialb/{record['id']}").status_code == 404


def test_stats_export_and_bulk_delete(client):
    a = create_record(client, overallStatus='Spam', group='G1')
    create_record(client, phoneNumber='3105551234', group='G2')

    stats = json.loads(client.get('/api/dialb/stats').data)['data']
    assert (stats['total'], stats['spam'], stats['clean'], stats['groups']) == (2, 1, 1, 2)

    response = client.get('/api/dialb/export')
    assert response.mimetype == 'text/csv'
    lines = response.data.decode().splitlines()
    assert lines[0] == 'Phone Number,Group,Overall Status,T-Mobile,AT&T,3rd Party,Last Checked'
    assert len(lines) == 3

    response = client.post('/api/dialb/bulk-delete', json={'ids': [a['id']]})
    assert json.loads(response.data)['data'] == {'deleted': 1}
