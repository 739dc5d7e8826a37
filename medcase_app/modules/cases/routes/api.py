# File: medcase_app/modules/cases/routes/api.py
from flask import jsonify, request

from medcase_app.core.error_handlers import ValidationError, success_response
from .. import cases_bp as blueprint
from ..interface import CaseInterface
from ..services.case_config_service import CaseConfigService
from ..services.case_session_manager import CaseSessionManager
from ..services.history_service import CaseHistoryRecorder


def _optional_int(payload, key):
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be an integer.")


@blueprint.route('/api/<int:case_id>/view', methods=['POST'])
def start_case_view(case_id):
    case = CaseInterface.get_case(case_id)
    manager = CaseSessionManager.load()
    manager.start_viewing(case)
    data = manager.presentation(case)
    manager.save()
    return jsonify(success_response(data))


@blueprint.route('/api/<int:case_id>/presentation', methods=['GET'])
def get_case_presentation(case_id):
    case = CaseInterface.get_case(case_id)
    manager = CaseSessionManager.load()
    data = manager.presentation(case)
    manager.save()
    return jsonify(success_response(data))


@blueprint.route('/api/<int:case_id>/eliminate', methods=['POST'])
def eliminate_case_option(case_id):
    case = CaseInterface.get_case(case_id)
    manager = CaseSessionManager.load()
    data = manager.eliminate_option(case)
    manager.save()
    return jsonify(success_response(data))


@blueprint.route('/api/<int:case_id>/help', methods=['POST'])
def register_case_help(case_id):
    case = CaseInterface.get_case(case_id)
    payload = request.get_json(silent=True) or {}
    manager = CaseSessionManager.load()
    data = manager.register_help(case, payload.get('kind'))
    manager.save()
    return jsonify(success_response(data))


@blueprint.route('/api/<int:case_id>/answer', methods=['POST'])
def submit_case_answer(case_id):
    case = CaseInterface.get_case(case_id)
    payload = request.get_json(silent=True) or {}
    selected_index = _optional_int(payload, 'selected_index')
    if selected_index is None:
        raise ValidationError("selected_index is required.")
    user_id = _optional_int(payload, 'user_id')

    manager = CaseSessionManager.load()
    data = manager.submit_answer(case, selected_index, user_id=user_id)
    manager.save()
    return jsonify(success_response(data))


@blueprint.route('/api/<int:case_id>/history', methods=['GET'])
def get_case_history(case_id):
    CaseInterface.get_case(case_id)
    user_id = request.args.get('user_id', type=int)
    entries = CaseHistoryRecorder.get_history(case_id, user_id=user_id)
    return jsonify(success_response([entry.to_dict() for entry in entries]))


@blueprint.route('/api/settings', methods=['GET'])
def get_case_settings():
    return jsonify(success_response(CaseConfigService.get_all()))
