from flask import Blueprint, jsonify, request, current_app
from scoreboard.services.identity import get_verifier
from scoreboard.services.origin import enforce_origin_policy
from scoreboard.services.scores import sync_score as svc_sync_score, top_players as svc_top_players


scores = Blueprint('scores', __name__)

# Boundary filter runs before every /api handler
scores.before_request(enforce_origin_policy)


@scores.route('/sync-score', methods=['POST'])
def sync_score():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    player = svc_sync_score(get_verifier(), data.get('token'), data.get('currentScore'))
    return jsonify({
        'success': True,
        'highScore': player.high_score,
        'name': player.name,
    })


@scores.route('/leaderboard', methods=['GET'])
def leaderboard():
    try:
        limit = int(current_app.config.get('LEADERBOARD_SIZE', 10))
    except (TypeError, ValueError):
        limit = 10
    players = svc_top_players(limit)
    return jsonify([p.to_leaderboard_dict() for p in players])
