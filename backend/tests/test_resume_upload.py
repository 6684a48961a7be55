import io

import docx

from careerhub.config import settings
from careerhub.utils.resume_parser import DOC_TYPE, DOCX_TYPE, MAX_RESUME_TEXT, extract_resume_text


def _docx_bytes(*paragraphs):
    document = docx.Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


def test_upload_docx_stores_file_and_records_interaction(client, make_user):
    user, headers = make_user()
    payload = _docx_bytes('Python developer', '', 'Skilled in SQL')
    r = client.post('/resume/upload', files={'file': ('cv.docx', payload, DOCX_TYPE)}, headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body['success'] is True
    assert body['resume_text'] == 'Python developer\nSkilled in SQL'
    assert body['resume_url'] == f"/resumes/{user['id']}/cv.docx"
    assert body['file_name'] == 'cv.docx'
    assert body['file_size'] == len(payload)
    assert (settings.RESUME_STORAGE_DIR / str(user['id']) / 'cv.docx').read_bytes() == payload

    events = client.get('/user-interactions', params={'interaction_type': 'resume_upload'}, headers=headers).json()
    assert len(events) == 1
    assert events[0]['metadata']['file_name'] == 'cv.docx'
    assert events[0]['metadata']['file_type'] == DOCX_TYPE
    assert events[0]['metadata']['file_size'].endswith('KB')

    download = client.get(body['resume_url'], headers=headers)
    assert download.status_code == 200
    assert download.content == payload


def test_resume_download_is_owner_only(client, make_user):
    owner, owner_headers = make_user()
    _, stranger = make_user()
    client.post('/resume/upload', files={'file': ('cv.doc', b'plain text resume', DOC_TYPE)}, headers=owner_headers)
    assert client.get(f"/resumes/{owner['id']}/cv.doc", headers=stranger).status_code == 403
    assert client.get(f"/resumes/{owner['id']}/missing.pdf", headers=owner_headers).status_code == 404


def test_upload_rejects_bad_files(client, auth_headers, monkeypatch):
    r = client.post('/resume/upload', files={'file': ('cv.txt', b'hello', 'text/plain')}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()['detail']['code'] == 'INVALID_FILE_TYPE'

    r = client.post('/resume/upload', files={'file': ('..', b'%PDF', 'application/pdf')}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()['detail']['code'] == 'INVALID_FILENAME'

    monkeypatch.setattr(settings, 'MAX_RESUME_BYTES', 10)
    r = client.post('/resume/upload', files={'file': ('cv.doc', b'x' * 11, DOC_TYPE)}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()['detail']['code'] == 'FILE_TOO_LARGE'


def test_extract_resume_text_fallbacks():
    assert extract_resume_text(b'Legacy resume: Python', 'cv.doc', DOC_TYPE) == 'Legacy resume: Python'
    # a corrupt PDF falls back to the raw bytes
    assert extract_resume_text(b'not really a pdf', 'cv.pdf', 'application/pdf') == 'not really a pdf'
    assert len(extract_resume_text(b'a' * (MAX_RESUME_TEXT + 50), 'cv.doc', DOC_TYPE)) == MAX_RESUME_TEXT


def test_resume_url_is_quoted(client, make_user):
    user, headers = make_user()
    r = client.post('/resume/upload', files={'file': ('my cv #2.doc', b'resume text', DOC_TYPE)}, headers=headers)
    assert r.status_code == 200
    assert r.json()['resume_url'] == f"/resumes/{user['id']}/my%20cv%20%232.doc"
    assert r.json()['file_name'] == 'my cv #2.doc'
    download = client.get(r.json()['resume_url'], headers=headers)
    assert download.status_code == 200
    assert download.content == b'resume text'
