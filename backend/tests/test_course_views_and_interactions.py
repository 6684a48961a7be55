def test_course_view_crud(client, auth_headers):
    r = client.post('/course-views', json={'course_name': 'Power BI Complete Course',
                                           'course_category': 'Business Intelligence'}, headers=auth_headers)
    assert r.status_code == 201
    view_id = r.json()['id']
    client.post('/course-views', json={'course_name': 'SQL for Data Analysis', 'course_category': 'Database'},
                headers=auth_headers)

    r = client.get('/course-views', params={'course_category': 'Database'}, headers=auth_headers)
    assert [v['course_name'] for v in r.json()] == ['SQL for Data Analysis']
    r = client.get('/course-views', params={'search': 'power'}, headers=auth_headers)
    assert [v['id'] for v in r.json()] == [view_id]

    r = client.put(f'/course-views/{view_id}', json={'course_category': 'Analytics'}, headers=auth_headers)
    assert r.json()['course_category'] == 'Analytics'
    assert r.json()['course_name'] == 'Power BI Complete Course'

    r = client.delete(f'/course-views/{view_id}', headers=auth_headers)
    assert r.json()['deleted_record']['id'] == view_id
    assert client.get(f'/course-views/{view_id}', headers=auth_headers).status_code == 404


def test_course_view_validation(client, auth_headers):
    r = client.post('/course-views', json={'course_category': 'Finance'}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()['detail']['code'] == 'MISSING_COURSE_NAME'
    r = client.post('/course-views', json={'course_name': 'Tally', 'course_category': ''}, headers=auth_headers)
    assert r.json()['detail']['code'] == 'MISSING_COURSE_CATEGORY'

    view_id = client.post('/course-views', json={'course_name': 'Tally', 'course_category': 'Finance'},
                          headers=auth_headers).json()['id']
    assert client.put(f'/course-views/{view_id}', json={}, headers=auth_headers).json()['detail']['code'] == 'NO_UPDATES'
    r = client.put(f'/course-views/{view_id}', json={'course_name': ' '}, headers=auth_headers)
    assert r.json()['detail']['code'] == 'INVALID_COURSE_NAME'


def test_record_and_list_interactions(client, auth_headers):
    r = client.post('/user-interactions', json={'interaction_type': 'job_search',
                                                'metadata': {'query': 'python'}}, headers=auth_headers)
    assert r.status_code == 201
    created = r.json()
    assert created['metadata'] == {'query': 'python'}
    assert 'details' not in created
    client.post('/user-interactions', json={'interaction_type': 'course_view'}, headers=auth_headers)

    r = client.get('/user-interactions', params={'interaction_type': 'job_search'}, headers=auth_headers)
    assert [i['id'] for i in r.json()] == [created['id']]
    r = client.get(f"/user-interactions/{created['id']}", headers=auth_headers)
    assert r.json()['interaction_type'] == 'job_search'
    assert client.get('/user-interactions/999', headers=auth_headers).status_code == 404


def test_interaction_validation(client, auth_headers):
    r = client.post('/user-interactions', json={}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()['detail']['code'] == 'MISSING_INTERACTION_TYPE'
    r = client.post('/user-interactions', json={'interaction_type': 'logout'}, headers=auth_headers)
    assert r.json()['detail']['code'] == 'INVALID_INTERACTION_TYPE'
    r = client.post('/user-interactions', json={'interaction_type': 'job_apply', 'metadata': [1, 2]},
                    headers=auth_headers)
    assert r.json()['detail']['code'] == 'INVALID_METADATA'
