"""
API tests for the cases blueprint.
"""

from medcase_app import db
from medcase_app.models import AppSettings


def _view(client, case_id):
    response = client.post(f'/cases/api/{case_id}/view')
    assert response.status_code == 200
    return response.get_json()['data']


def test_view_returns_shuffled_options_without_answer(client, make_case):
    case = make_case()

    data = _view(client, case.case_id)

    assert data['ready'] is True
    assert sorted(data['options']) == ['A', 'B', 'C', 'D']
    assert data['can_eliminate'] is True
    assert 'correct_index' not in data


def test_presentation_keeps_order_between_requests(client, make_case):
    case = make_case(options=('A', 'B', 'C', 'D', 'E', 'F'))
    viewed = _view(client, case.case_id)

    first = client.get(f'/cases/api/{case.case_id}/presentation').get_json()['data']
    second = client.get(f'/cases/api/{case.case_id}/presentation').get_json()['data']

    assert first['options'] == viewed['options']
    assert second['options'] == viewed['options']


def test_full_flow_correct_answer(client, make_case):
    case = make_case(points=10)
    data = _view(client, case.case_id)

    eliminated = client.post(f'/cases/api/{case.case_id}/eliminate').get_json()['data']
    assert data['options'][eliminated['eliminated_index']] != 'C'
    assert eliminated['remaining_eliminations'] == 1

    response = client.post(f'/cases/api/{case.case_id}/answer',
                           json={'selected_index': data['options'].index('C'), 'user_id': 3})
    result = response.get_json()['data']

    assert response.status_code == 200
    assert result['is_correct'] is True
    assert result['points'] == 8
    assert result['correct_index'] == data['options'].index('C')


def test_second_answer_conflicts(client, make_case):
    case = make_case()
    _view(client, case.case_id)
    client.post(f'/cases/api/{case.case_id}/answer', json={'selected_index': 0})

    response = client.post(f'/cases/api/{case.case_id}/answer', json={'selected_index': 1})

    assert response.status_code == 409
    assert response.get_json()['code'] == 'SESSION_STATE'


def test_answer_requires_selected_index(client, make_case):
    case = make_case()
    _view(client, case.case_id)

    missing = client.post(f'/cases/api/{case.case_id}/answer', json={})
    garbage = client.post(f'/cases/api/{case.case_id}/answer', json={'selected_index': 'abc'})
    out_of_range = client.post(f'/cases/api/{case.case_id}/answer', json={'selected_index': 10})

    assert missing.status_code == 400
    assert garbage.status_code == 400
    assert out_of_range.status_code == 400
    assert out_of_range.get_json()['code'] == 'VALIDATION_ERROR'


def test_answer_without_viewing_conflicts(client, make_case):
    case = make_case()

    response = client.post(f'/cases/api/{case.case_id}/answer', json={'selected_index': 0})

    assert response.status_code == 409


def test_help_kinds(client, make_case):
    case = make_case()
    _view(client, case.case_id)

    ok = client.post(f'/cases/api/{case.case_id}/help', json={'kind': 'skip'})
    bad = client.post(f'/cases/api/{case.case_id}/help', json={'kind': 'teleport'})

    assert ok.status_code == 200
    assert ok.get_json()['data']['help_used'] == ['skip']
    assert bad.status_code == 400


def test_unknown_case_is_404(client):
    response = client.get('/cases/api/9999/presentation')

    assert response.status_code == 404
    assert response.get_json()['code'] == 'NOT_FOUND'


def test_unknown_endpoint_is_json_404(client):
    response = client.get('/cases/api/does-not-exist')

    assert response.status_code == 404
    assert response.get_json()['success'] is False


def test_case_without_options_is_not_ready(client, make_case):
    case = make_case(options=[], correct_index=0)

    data = _view(client, case.case_id)

    assert data['ready'] is False
    assert data['options'] == []
    assert client.post(f'/cases/api/{case.case_id}/eliminate').status_code == 409


def test_history_lists_attempts(client, make_case):
    case = make_case()
    data = _view(client, case.case_id)
    client.post(f'/cases/api/{case.case_id}/answer',
                json={'selected_index': data['options'].index('A'), 'user_id': 5})

    everyone = client.get(f'/cases/api/{case.case_id}/history').get_json()['data']
    mine = client.get(f'/cases/api/{case.case_id}/history?user_id=5').get_json()['data']
    others = client.get(f'/cases/api/{case.case_id}/history?user_id=6').get_json()['data']

    assert len(everyone) == 1
    assert mine[0]['is_correct'] is False
    assert mine[0]['details']['selected_text'] == 'A'
    assert others == []


def test_settings_reflect_overrides(client):
    AppSettings.set('CASE_DEFAULT_POINTS', 25, category='cases')
    db.session.commit()

    data = client.get('/cases/api/settings').get_json()['data']

    assert data['CASE_DEFAULT_POINTS'] == 25
    assert data['CASE_MAX_ELIMINATIONS'] == 2
