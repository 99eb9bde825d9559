from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from extensions import db
from services.comments import add_comment, delete_comment, get_comments, toggle_like
from services.exceptions import ApiError, BadRequestError, ConflictError, envelope

comments_api = Blueprint('comments_api', __name__)

# action -> (handler, reads from query string, success status)
ACTIONS = {
    'add-comment': (add_comment, False, 200),
    'get-comments': (get_comments, True, 200),
    'like-comment': (toggle_like, False, 200),
    'delete-comment': (delete_comment, False, 200),
}

INVALID_ACTION = "Invalid action. Supported actions: " + ", ".join(ACTIONS)


def _body():
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form


@comments_api.after_request
def add_cors_headers(response):
    response.headers['Access-Control-Allow-Origin'] = '*'
    response.headers['Access-Control-Allow-Methods'] = 'GET, POST, OPTIONS'
    response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization, X-API-Key'
    return response


@comments_api.route('/gallery_comments_api', methods=['GET', 'POST', 'OPTIONS'])
@comments_api.route('/api/gallery-comments', methods=['GET', 'POST', 'OPTIONS'])
def gallery_comments():
    if request.method == 'OPTIONS':
        return '', 200

    body = _body()
    action = body.get('action') or request.args.get('action', '')
    if not isinstance(action, str) or action not in ACTIONS:
        return BadRequestError(INVALID_ACTION).to_response()

    handler, reads_query, status = ACTIONS[action]
    params = request.args if reads_query else body

    try:
        message, data = handler(params)
    except ApiError as e:
        db.session.rollback()
        return e.to_response()
    except IntegrityError:
        db.session.rollback()
        current_app.logger.exception("Integrity error in %s", action)
        return ConflictError("Request conflicted with a concurrent update, please retry").to_response()
    except OperationalError:
        db.session.rollback()
        current_app.logger.exception("Database unavailable in %s", action)
        return ApiError("Database connection failed", 503).to_response()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Database error in %s", action)
        return ApiError("Database error").to_response()

    return jsonify(envelope(True, message, data)), status
