from careerhub.utils.course_catalog import COURSE_LISTINGS, TRACKS, recommend_courses
from careerhub.utils.skills import detect_skills


def test_public_course_listing(client):
    r = client.get('/courses')
    assert r.status_code == 200
    body = r.json()
    assert body['success'] is True
    assert len(body['courses']) == len(COURSE_LISTINGS)
    assert body['courses'][0]['name'] == 'Introduction to Web Development'


def test_recommendations_follow_education_then_skills_then_interests(client, auth_headers):
    r = client.post('/courses/recommend', json={'education': 'BCA'}, headers=auth_headers)
    names = [c['name'] for c in r.json()['courses']]
    assert names == [c['name'] for c in TRACKS['bca'] + TRACKS['tech']]
    assert r.json()['total_courses'] == len(names)

    r = client.post('/courses/recommend', json={'education': 'BCA', 'skills': ['aws'], 'interests': ['mobile']},
                    headers=auth_headers)
    names = [c['name'] for c in r.json()['courses']]
    assert names[0] == 'React Native - Mobile App Development'
    assert names[1] == 'AWS Certified Solutions Architect'


def test_recommendation_edge_cases():
    assert recommend_courses(None) == []
    sampler = recommend_courses('Diploma in Arts')
    assert [c['name'] for c in sampler] == [
        c['name'] for c in TRACKS['bca'][:3] + TRACKS['bcom'][:3] + TRACKS['bda'][:2]
    ]
    mba = [c['name'] for c in recommend_courses('MBA')]
    assert mba.count('Digital Marketing Masterclass') == 1
    recommend_courses('BCA')[0]['name'] = 'changed'
    assert TRACKS['bca'][0]['name'] == 'Web Development Bootcamp'


def test_skill_detection(client, auth_headers):
    text = 'Experienced in Python, SQL and Docker. Strong communication.'
    r = client.post('/skills/recommend', json={'resume_text': text, 'education': 'BCA'}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {
        'skills': ['Python', 'SQL', 'Docker', 'Communication'],
        'message': 'Detected 4 relevant skills from your resume',
    }


def test_skill_detection_caps_list_but_reports_full_count(client, auth_headers):
    text = 'JavaScript Python C++ React Node.js Angular Vue.js PostgreSQL MongoDB AWS Docker Kubernetes'
    total = len(detect_skills(text))
    assert total > 10
    r = client.post('/skills/recommend', json={'resume_text': text}, headers=auth_headers)
    assert len(r.json()['skills']) == 10
    assert r.json()['message'] == f'Detected {total} relevant skills from your resume'


def test_skill_defaults_and_validation(client, auth_headers):
    assert detect_skills('I like cooking', 'BCom') == ['Excel', 'Financial Accounting', 'Tally', 'Taxation',
                                                        'Business Analytics']
    assert detect_skills('I like cooking') == []
    r = client.post('/skills/recommend', json={'resume_text': '  '}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()['detail']['code'] == 'MISSING_RESUME_TEXT'
