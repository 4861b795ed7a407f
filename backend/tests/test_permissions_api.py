def test_create_and_list_permissions(client, admin_headers):
    resp = client.post('/permissions', json={'screen_name': 'ticket', 'action': 'CREATE', 'description': 'open tickets'}, headers=admin_headers)
    assert resp.status_code == 201, resp.get_json()
    assert resp.get_json()['key'] == 'ticket_create'
    client.post('/permissions', json={'screen_name': 'user', 'action': 'VIEW', 'description': 'see users'}, headers=admin_headers)
    client.post('/permissions', json={'screen_name': 'ticket', 'action': 'VIEW', 'description': 'see tickets'}, headers=admin_headers)

    body = client.get('/permissions?group=screen', headers=admin_headers).get_json()
    assert len(body['data']) == 3
    assert body['pagination']['limit'] == 12
    assert list(body['groups']) == ['ticket', 'user']
    assert [p['key'] for p in body['groups']['ticket']] == ['ticket_create', 'ticket_view']


def test_invalid_permission_is_field_scoped(client, admin_headers, fake_api):
    resp = client.post('/permissions', json={'screen_name': 'ticket list', 'action': 'VIEW', 'description': ''}, headers=admin_headers)
    assert resp.status_code == 400
    fields = resp.get_json()['error']['fields']
    assert set(fields) == {'screen_name', 'description'}
    assert fake_api.calls_to('POST', '/permissions') == []


def test_duplicate_permission_relays_conflict(client, admin_headers, fake_api):
    fake_api.add_permission('ticket', 'VIEW')
    resp = client.post('/permissions', json={'screen_name': 'ticket', 'action': 'VIEW', 'description': 'x'}, headers=admin_headers)
    assert resp.status_code == 409
    assert resp.get_json()['error']['detail'] == 'Permission already exists'


def test_simple_list_exposes_keys(client, admin_headers, fake_api):
    fake_api.add_permission('room', 'DELETE', 'remove rooms')
    body = client.get('/permissions/simple', headers=admin_headers).get_json()
    assert body['data'][0]['permission_key'] == 'room_delete'
    assert body['data'][0]['description'] == 'remove rooms'


def test_preview_key_and_template(client, admin_headers):
    assert client.post('/permissions/preview-key', json={'screen_name': 'bed', 'action': 'EDIT'}, headers=admin_headers).get_json() == {'key': 'bed_edit'}
    assert client.post('/permissions/preview-key', json={'action': 'EDIT'}, headers=admin_headers).get_json() == {'key': None}
    template = client.get('/permissions/bulk/template', headers=admin_headers).get_json()
    assert template['data'] == [{'screen_name': '', 'action': 'CREATE', 'description': ''}]


def test_bulk_endpoint(client, admin_headers, fake_api):
    rows = [
        {'screen_name': 'bed', 'action': 'VIEW', 'description': 'see beds'},
        {'screen_name': 'bed', 'action': 'EDIT', 'description': 'edit beds'},
    ]
    resp = client.post('/permissions/bulk', json={'permissions': rows}, headers=admin_headers)
    assert resp.status_code == 201, resp.get_json()
    assert resp.get_json()['count'] == 2
    assert len(fake_api.permissions) == 2


def test_bulk_endpoint_reports_row_errors(client, admin_headers, fake_api):
    rows = [
        {'screen_name': 'bed', 'action': 'VIEW', 'description': 'see beds'},
        {'screen_name': '', 'action': 'CREATE', 'description': ''},
    ]
    resp = client.post('/permissions/bulk', json=rows, headers=admin_headers)
    assert resp.status_code == 400
    fields = resp.get_json()['error']['fields']
    assert list(fields) == ['1']
    assert fake_api.calls_to('POST', '/permissions/bulk') == []


def test_bulk_endpoint_empty_batch(client, admin_headers):
    resp = client.post('/permissions/bulk', json=[], headers=admin_headers)
    assert resp.status_code == 400
    assert resp.get_json()['error']['detail'] == 'Please add at least one permission'


def test_bulk_endpoint_batch_rejection(client, admin_headers, fake_api):
    fake_api.add_permission('bed', 'VIEW')
    resp = client.post('/permissions/bulk', json=[{'screen_name': 'bed', 'action': 'VIEW', 'description': 'dup'}], headers=admin_headers)
    assert resp.status_code == 400
    assert resp.get_json()['error']['title'] == 'Batch Rejected'


def test_update_and_delete_permission(client, admin_headers, fake_api):
    p = fake_api.add_permission('bed', 'VIEW', 'old')
    resp = client.patch(f"/permissions/{p['s_no']}", json={'description': 'see all beds'}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json()['description'] == 'see all beds'
    resp = client.patch(f"/permissions/{p['s_no']}", json={'action': 'EDIT', 'description': 'x'}, headers=admin_headers)
    assert resp.status_code == 400
    assert client.delete(f"/permissions/{p['s_no']}", headers=admin_headers).get_json() == {'status': 'deleted'}
    assert p['s_no'] not in fake_api.permissions
