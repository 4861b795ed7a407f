def test_role_crud_flow(client, admin_headers, fake_api):
    resp = client.post('/roles', json={'role_name': 'Warden', 'permissions': {'ticket_view': True}}, headers=admin_headers)
    assert resp.status_code == 201, resp.get_json()
    role = resp.get_json()
    assert role['status'] == 'ACTIVE'
    role_id = role['id']

    resp = client.patch(f'/roles/{role_id}', json={'role_name': 'Head Warden', 'status': 'INACTIVE', 'permissions': {'ticket_view': True}}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json()['role_name'] == 'Head Warden'

    listing = client.get('/roles?status=INACTIVE', headers=admin_headers).get_json()
    assert [r['id'] for r in listing['data']] == [role_id]
    assert listing['pagination']['total'] == 1

    assert client.delete(f'/roles/{role_id}', headers=admin_headers).get_json() == {'status': 'deleted'}
    resp = client.get(f'/roles/{role_id}', headers=admin_headers)
    assert resp.status_code == 404
    assert resp.get_json()['error']['detail'] == 'Role not found'


def test_create_role_requires_name(client, admin_headers, fake_api):
    resp = client.post('/roles', json={'role_name': '  '}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.get_json()['error']['fields'] == {'role_name': 'Role name is required'}
    assert fake_api.calls_to('POST', '/roles') == []


def test_assignment_view_lists_every_registry_key(client, admin_headers, fake_api):
    fake_api.add_permission('ticket', 'VIEW', 'see tickets')
    fake_api.add_permission('ticket', 'EDIT', 'edit tickets')
    role = fake_api.add_role('Ops', {'ticket_view': True, 'retired_report_view': True})
    body = client.get(f"/roles/{role['s_no']}/assignment", headers=admin_headers).get_json()
    assert body['role_name'] == 'Ops'
    assert {p['permission_key']: p['granted'] for p in body['permissions']} == {'ticket_view': True, 'ticket_edit': False}
    assert body['extra_keys'] == {'retired_report_view': True}


def test_toggle_single_permission(client, admin_headers, fake_api):
    role = fake_api.add_role('Ops', {'ticket_view': True, 'retired_report_view': True})
    resp = client.put(f"/roles/{role['s_no']}/permissions/ticket_edit", json={'granted': True}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json()['permissions'] == {'ticket_view': True, 'retired_report_view': True, 'ticket_edit': True}
    resp = client.put(f"/roles/{role['s_no']}/permissions/ticket_view", json={'granted': False}, headers=admin_headers)
    assert fake_api.roles[role['s_no']]['permissions']['ticket_view'] is False


def test_toggle_requires_boolean(client, admin_headers, fake_api):
    role = fake_api.add_role('Ops')
    resp = client.put(f"/roles/{role['s_no']}/permissions/ticket_view", json={'granted': 'yes'}, headers=admin_headers)
    assert resp.status_code == 400
    assert fake_api.calls_to('PATCH', f"/roles/{role['s_no']}") == []


def test_role_update_rejected_while_in_flight(client, admin_headers, fake_api, panel):
    role = fake_api.add_role('Ops')
    with panel['inflight'].submit('role.update', role['s_no']):
        resp = client.patch(f"/roles/{role['s_no']}", json={'role_name': 'Ops 2'}, headers=admin_headers)
    assert resp.status_code == 409
    assert resp.get_json()['error']['title'] == 'Submission In Progress'
    assert fake_api.calls_to('PATCH', f"/roles/{role['s_no']}") == []


def test_bad_pagination_is_400(client, admin_headers):
    resp = client.get('/roles?page=abc', headers=admin_headers)
    assert resp.status_code == 400


def test_partial_update_keeps_unsent_fields(client, admin_headers, fake_api):
    role = fake_api.add_role('Warden', {'ticket_edit': True, 'legacy_view': True}, status='INACTIVE')
    resp = client.patch(f"/roles/{role['s_no']}", json={'role_name': 'Head Warden'}, headers=admin_headers)
    assert resp.status_code == 200, resp.get_json()
    stored = fake_api.roles[role['s_no']]
    assert stored['role_name'] == 'Head Warden'
    assert stored['status'] == 'INACTIVE'
    assert stored['permissions'] == {'ticket_edit': True, 'legacy_view': True}

    client.patch(f"/roles/{role['s_no']}", json={'status': 'ACTIVE'}, headers=admin_headers)
    assert stored['status'] == 'ACTIVE'
    assert stored['role_name'] == 'Head Warden'
    assert stored['permissions'] == {'ticket_edit': True, 'legacy_view': True}


def test_non_boolean_permission_values_rejected(client, admin_headers, fake_api):
    resp = client.post('/roles', json={'role_name': 'Ops', 'permissions': {'ticket_edit': 'false'}}, headers=admin_headers)
    assert resp.status_code == 400
    assert 'permissions' in resp.get_json()['error']['fields']
    assert fake_api.calls_to('POST', '/roles') == []
