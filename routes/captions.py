"""
Caption Editor Routes
JSON endpoints over the caption session plus the WebVTT track download
"""
import logging

from flask import Blueprint, Response, current_app, jsonify, request

from services.captions_session import CaptionSession, Notice
from services.captions_types import CaptionDraft, CaptionErrorKind

logger = logging.getLogger(__name__)

# Create blueprint
captions_bp = Blueprint('captions', __name__)

STATUS_BY_ERROR = {
    CaptionErrorKind.MISSING_FIELD: 400,
    CaptionErrorKind.INVALID_RANGE: 400,
    CaptionErrorKind.OVERLAP: 400,
    CaptionErrorKind.INDEX_OUT_OF_RANGE: 404,
}


def get_session() -> CaptionSession:
    return current_app.extensions['caption_session']


def _result_response(result, session, success_status=200):
    """Map a store result to the JSON envelope the editor UI consumes"""
    notice = Notice.from_result(result)
    body = {
        'status': notice.level,
        'message': notice.message,
        'index': result.index,
        'session': session.to_dict(),
    }
    if not result.success:
        body['code'] = result.error.value
        return jsonify(body), STATUS_BY_ERROR[result.error]
    if result.caption is not None:
        body['caption'] = result.caption.to_dict()
    return jsonify(body), success_status


def _require_source(session):
    if session.has_source:
        return None
    return jsonify({'status': 'error', 'message': 'Set a video URL first.'}), 409


@captions_bp.route('/api/captions')
def list_captions():
    """
    Current session state
    GET /api/captions
    """
    return jsonify(get_session().to_dict())


@captions_bp.route('/api/source', methods=['PUT'])
def change_source():
    """
    Switch video source; captions are cleared when the URL changes
    PUT /api/source
    {"url": "https://example.com/video.mp4"}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get('url', ''), str):
        return jsonify({'status': 'error', 'message': 'url (string) required'}), 400

    session = get_session()
    changed = session.change_source(data.get('url', ''))
    return jsonify({
        'status': 'success',
        'changed': changed,
        'session': session.to_dict(),
    })


@captions_bp.route('/api/captions', methods=['POST'])
def submit_caption():
    """
    Add a caption, or update the one being edited
    POST /api/captions
    {"text": "Hello", "start": "1", "end": "3.5"}
    """
    session = get_session()
    missing_source = _require_source(session)
    if missing_source:
        return missing_source

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'status': 'error', 'message': 'JSON object body required'}), 400

    result = session.submit(CaptionDraft.from_mapping(data))
    status = 201 if result.action == 'added' else 200
    return _result_response(result, session, success_status=status)


@captions_bp.route('/api/captions/<int:index>/edit', methods=['POST'])
def begin_edit(index):
    """
    Load a caption into the draft for editing
    POST /api/captions/2/edit
    """
    session = get_session()
    missing_source = _require_source(session)
    if missing_source:
        return missing_source

    result = session.edit(index)
    return _result_response(result, session)


@captions_bp.route('/api/captions/<int:index>/edit', methods=['DELETE'])
def cancel_edit(index):
    """
    Leave edit mode without saving
    DELETE /api/captions/2/edit  (409 if caption 2 is not being edited)
    """
    session = get_session()
    if not session.cancel_edit(index):
        return jsonify({
            'status': 'error',
            'message': f'Caption {index} is not being edited',
            'session': session.to_dict(),
        }), 409
    return jsonify({'status': 'success', 'session': session.to_dict()})


@captions_bp.route('/api/captions/<int:index>', methods=['DELETE'])
def delete_caption(index):
    """
    Delete a caption by position
    DELETE /api/captions/0
    """
    session = get_session()
    missing_source = _require_source(session)
    if missing_source:
        return missing_source

    result = session.delete(index)
    return _result_response(result, session)


@captions_bp.route('/captions/track.vtt')
def caption_track():
    """WebVTT subtitle track for the current video"""
    session = get_session()
    return Response(
        session.track(),
        mimetype=session.encoder.mimetype,
        headers={'Cache-Control': 'no-store'},
    )


@captions_bp.route('/health')
def health():
    """Health check for the caption editor"""
    session = get_session()
    return jsonify({
        'status': 'ok',
        'source_url': session.source_url,
        'caption_count': len(session.store),
    })
