from flask import Blueprint, current_app, jsonify, request

from trebekbot.commands import MessageEvent

webhook = Blueprint('webhook', __name__)


@webhook.route('/', methods=['GET'])
def index():
    return jsonify({'message': 'Welcome to the trebekbot server!'})


@webhook.route('/', methods=['POST'])
def receive_message():
    """Slack outgoing webhook. Always answers 200, with an empty text on failure.

    Params sent in the request:
    token, team_id, channel_id, channel_name, timestamp, user_id,
    user_name, text, trigger_word
    """
    game = current_app.extensions['trebekbot']
    payload = request.form.to_dict() or request.get_json(silent=True) or {}
    try:
        event = MessageEvent.from_payload(payload)
        reply = game.respond(event)
    except Exception as exc:
        current_app.logger.exception(f"[webhook-error] channel={payload.get('channel_id')} {exc}")
        reply = ''
    return jsonify(game.delivery.payload(reply)), 200
