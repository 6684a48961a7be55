from sqlmodel import Session

from careerhub import models, repositories
from careerhub.database import engine


def _seed_local_jobs():
    with Session(engine) as session:
        repositories.JobRepository(session).create_many([
            models.Job(
                title='Python Developer', company='Acme Labs', location='Pune', salary=900000,
                description='Design and build REST services. Write unit tests for every module\nReview pull requests',
                posted_date='2026-01-02T00:00:00+00:00',
            ),
            models.Job(
                title='Junior Accountant', company='Ledger Co', location='Mumbai', salary=300000,
                description='Books', job_type='Part-time', posted_date='2026-01-01T00:00:00+00:00',
            ),
        ])


def _external(job_id, salary):
    return {
        'id': job_id, 'title': 'Senior Python Developer', 'company': 'Remote Co', 'location': 'India',
        'salary': salary, 'description': 'Lead a team', 'type': 'Full-time', 'posted_date': '1 day ago',
        'source': 'serpapi', 'apply_link': 'https://jobs.example.com/1', 'thumbnail': None, 'extensions': [],
    }


def test_external_results_come_first_and_share_salary_filter(client, auth_headers, monkeypatch):
    _seed_local_jobs()
    calls = []

    def fake_fetch(search, location, api_key, timeout_s):
        calls.append((search, location))
        return [_external('serp-1', 1500000), _external('serp-2', 200000)]

    monkeypatch.setattr('careerhub.main.fetch_jobs_from_serpapi', fake_fetch)
    r = client.get('/jobs/search', params={'search': 'developer', 'min_salary': 500000}, headers=auth_headers)
    assert r.status_code == 200
    body = r.json()
    assert calls == [('developer', '')]
    assert [j['source'] for j in body['jobs']] == ['serpapi', 'local']
    assert body['jobs'][0]['id'] == 'serp-1'
    assert body['total_jobs'] == 2

    local = body['jobs'][1]
    assert local['title'] == 'Python Developer'
    assert local['type'] == 'Full-time'
    assert local['description'] == (
        '• Design and build REST services\n'
        '• Write unit tests for every module\n'
        '• Review pull requests'
    )


def test_local_only_when_no_api_key(client, auth_headers):
    _seed_local_jobs()
    r = client.get('/jobs/search', headers=auth_headers)
    body = r.json()
    assert [j['title'] for j in body['jobs']] == ['Python Developer', 'Junior Accountant']
    assert body['jobs'][1]['description'] == 'Books'
    assert body['jobs'][1]['type'] == 'Part-time'

    r = client.get('/jobs/search', params={'location': 'mumbai'}, headers=auth_headers)
    assert [j['company'] for j in r.json()['jobs']] == ['Ledger Co']
    r = client.get('/jobs/search', params={'max_salary': 100000}, headers=auth_headers)
    assert r.json() == {'jobs': [], 'total_jobs': 0}


def test_rejects_inverted_salary_range(client, auth_headers):
    r = client.get('/jobs/search', params={'min_salary': 900, 'max_salary': 100}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()['detail']['code'] == 'INVALID_SALARY_RANGE'


def test_requires_auth(client):
    assert client.get('/jobs/search').status_code in (401, 403)


def test_malformed_external_result_does_not_break_search(client, auth_headers, monkeypatch):
    from careerhub.config import settings
    from careerhub.utils import serpapi

    _seed_local_jobs()

    class _Response:
        def raise_for_status(self):
            pass

        def json(self):
            return {'jobs_results': [
                {'title': 'Dev', 'detected_extensions': {'salary': 500000}},
                {'title': 'Dev', 'detected_extensions': 'junk'},
            ]}

    monkeypatch.setattr(settings, 'SERPAPI_KEY', 'key')
    monkeypatch.setattr(serpapi.requests, 'get', lambda *a, **k: _Response())
    r = client.get('/jobs/search', headers=auth_headers)
    assert r.status_code == 200
    body = r.json()
    assert [j['source'] for j in body['jobs']] == ['serpapi', 'local', 'local']
    assert body['jobs'][0]['salary'] == 500000
