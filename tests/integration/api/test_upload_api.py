# tests/integration/api/test_upload_api.py
# -*- coding: utf-8 -*-
"""
Integration tests for CSV uploads (/api/upload).
"""
import json

from didadmin.services.did_service import DidService

DID_CSV = "Phone,Trunk,Forward\n2125550100,T1,3055550100\n3105551234,T2,\n3055550100,T3,\n"
DIALB_CSV = ("Phone Number,Group,Overall Status,T-Mobile,AT&T,3rd Party,Last Checked\n"
             "2125550100,G1,Spam,true,false,false,2024-05-01\n")


def test_upload_dids_end_to_end(client, stores, csv_file):
    """
    GIVEN a three row Phone/Trunk/Forward CSV
    WHEN it is posted twice to /api/upload/dids
    THEN the first upload adds three DIDs and the second reports three duplicates.
    """
    response = client.post('/api/upload/dids', data={'file': csv_file(DID_CSV, 'carrier.csv'), 'provider': 'Acme'},
                           content_type='multipart/form-data')

    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['success'] is True
    assert data['data']['successCount'] == 3
    assert data['data']['duplicateCount'] == 0
    assert data['data']['totalProcessed'] == 3
    assert data['data']['skippedCount'] == 0
    assert data['message'] == "Import completed: 3 successful, 0 duplicates, 0 skipped out of 3."
    states = {d.did_number: d.state for d in stores.dids.all()}
    assert states == {'2125550100': 'New York', '3105551234': 'California', '3055550100': 'Florida'}

    response = client.post('/api/upload', data={'file': csv_file(DID_CSV), 'provider': 'Acme'},
                           content_type='multipart/form-data')

    data = json.loads(response.data)
    assert (data['data']['successCount'], data['data']['duplicateCount']) == (0, 3)
    assert stores.dids.count() == 3


def test_upload_requires_provider(client, csv_file):
    response = client.post('/api/upload/dids', data={'file': csv_file(DID_CSV)},
                           content_type='multipart/form-data')
    assert response.status_code == 400
    assert 'provider' in json.loads(response.data)['errors']


def test_upload_requires_file(client):
    response = client.post('/api/upload/dids', data={'provider': 'Acme'}, content_type='multipart/form-data')
    assert response.status_code == 400


def test_upload_rejects_non_csv(client, csv_file):
    response = client.post('/api/upload/dids', data={'file': csv_file(DID_CSV, 'numbers.xlsx'), 'provider': 'A'},
                           content_type='multipart/form-data')
    assert response.status_code == 400
    assert json.loads(response.data)['error'] == 'UnsupportedFileType'


def test_upload_without_header(client, stores, csv_file):
    response = client.post('/api/upload/dids', data={'file': csv_file("1,2,3\n4,5,6\n"), 'provider': 'A'},
                           content_type='multipart/form-data')
    assert response.status_code == 400
    assert 'Could not identify header row' in json.loads(response.data)['message']
    assert stores.dids.count() == 0


def test_upload_with_new_company(client, stores, csv_file):
    data = {'file': csv_file(DID_CSV), 'provider': 'Acme', 'newCompanyName': 'Fresh Co'}
    response = client.post('/api/upload/dids', data=data, content_type='multipart/form-data')

    assert response.status_code == 200
    assert stores.companies.count() == 1
    assert {d.company_name for d in stores.dids.all()} == {'Fresh Co'}


def test_preview(client, stores, csv_file):
    response = client.post('/api/upload/preview', data={'file': csv_file("Report\n" + DID_CSV)},
                           content_type='multipart/form-data')

    assert response.status_code == 200
    data = json.loads(response.data)['data']
    assert data['headerIndex'] == 1
    assert data['mapping'] == {'didNumber': 'Phone', 'trunkId': 'Trunk', 'didForward': 'Forward'}
    assert data['rowCount'] == 3
    assert data['preview'][0]['didForward'] == '13055550100'
    assert stores.dids.count() == 0


def test_upload_dialb(client, stores, csv_file):
    response = client.post('/api/upload/dialb', data={'file': csv_file(DIALB_CSV, 'dialb.csv')},
                           content_type='multipart/form-data')

    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['data'] == {'success': True, 'imported': 1, 'errors': []}
    assert stores.dialb.count() == 1


def test_upload_area_codes_replaces_table(client, stores, csv_file):
    response = client.post('/api/upload/areacodes', data={'file': csv_file("Area Code,State\n111,Ohio\n")},
                           content_type='multipart/form-data')

    assert response.status_code == 200
    assert json.loads(response.data)['total'] == 1
    assert [ac.code for ac in stores.area_codes.all()] == ['111']


def test_upload_area_codes_updates_did_states(client, stores, csv_file):
    """
    GIVEN a DID in area code 212 (New York)
    WHEN an area code CSV mapping 212 to another state is uploaded
    THEN listing DIDs shows the new state.
    """
    DidService.create_did({'did_number': '12125550100'})

    response = client.post('/api/upload/areacodes', data={'file': csv_file("Area Code,State\n212,Elsewhere\n")},
                           content_type='multipart/form-data')
    assert response.status_code == 200

    response = client.get('/api/dids')
    assert json.loads(response.data)['data'][0]['state'] == 'Elsewhere'


def test_history_and_delete(client, csv_file):
    client.post('/api/upload/dids', data={'file': csv_file(DID_CSV, 'one.csv'), 'provider': 'A'},
                content_type='multipart/form-data')

    response = client.get('/api/upload/history')
    data = json.loads(response.data)
    assert data['total'] == 1
    entry = data['data'][0]
    assert (entry['originalName'], entry['uploadType'], entry['successCount']) == ('one.csv', 'dids', 3)
    assert entry['skippedCount'] == 0

    assert client.delete(f"/api/upload/{entry['id']}").status_code == 200
    assert client.delete(f"/api/upload/{entry['id']}").status_code == 404


def test_templates(client):
    response = client.get('/api/upload/template/dids')
    assert response.status_code == 200
    assert response.mimetype == 'text/csv'
    assert response.headers['Content-Disposition'] == 'attachment; filename=dids_template.csv'
    assert response.data.decode().splitlines() == [
        'Phone Number,Area Code,Status,Provider,Assigned Date',
        '+1-555-123-4567,555,active,Provider A,2024-01-15',
    ]
    assert client.get('/api/upload/template/unknown').status_code == 404
