from careerhub import models
from careerhub.services import profile_completeness


def test_empty_dashboard(client, auth_headers):
    r = client.get('/dashboard/stats', headers=auth_headers)
    assert r.status_code == 200
    body = r.json()
    assert body['stats'] == {
        'total_applications': 0, 'total_course_views': 0, 'profile_completeness': 0, 'skills_count': 0,
    }
    assert body['recent_activity'] == []
    assert body['profile'] is None


def test_dashboard_aggregates_activity(client, auth_headers):
    client.post('/profiles', json={
        'experience_level': 'Fresher', 'education': 'BCA', 'skills': ['Python', 'SQL'], 'interests': [],
        'phone': '9876543210', 'location': 'Pune',
    }, headers=auth_headers)
    for i in range(6):
        client.post('/job-applications', json={
            'job_title': f'Developer {i}', 'company': 'Acme', 'location': 'Pune', 'salary': 500000,
            'job_description': 'Build things',
        }, headers=auth_headers)
    for i in range(6):
        client.post('/course-views', json={'course_name': f'Course {i}', 'course_category': 'Programming'},
                    headers=auth_headers)

    body = client.get('/dashboard/stats', headers=auth_headers).json()
    assert body['stats'] == {
        'total_applications': 6, 'total_course_views': 6, 'profile_completeness': 71, 'skills_count': 2,
    }
    assert [a['job_title'] for a in body['recent_applications']] == [f'Developer {i}' for i in (5, 4, 3, 2, 1)]
    assert len(body['recent_courses']) == 5
    activity = body['recent_activity']
    assert len(activity) == 10
    assert activity[0] == {
        'type': 'course', 'title': 'Viewed Course 5', 'category': 'Programming', 'date': activity[0]['date'],
    }
    assert activity[-1]['type'] == 'application'
    assert body['profile']['education'] == 'BCA'


def test_profile_completeness_counts_non_empty_fields():
    profile = models.Profile(user_id=1, experience_level='Mid', education='MBA', skills=[], interests=['x'])
    assert profile_completeness(profile) == 43
    profile.skills = ['a']
    profile.resume_url = '/resumes/1/cv.pdf'
    profile.phone = '1'
    profile.location = 'Delhi'
    assert profile_completeness(profile) == 100
    assert profile_completeness(None) == 0
