from typing import List

from flask import current_app
from sqlalchemy import case
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from scoreboard import db
from scoreboard.errors import ServerError, Unauthorized, ValidationError
from scoreboard.models import Player
from scoreboard.services.connection import ensure_connected
from scoreboard.services.identity import IdentityClaims

DEFAULT_LEADERBOARD_LIMIT = 10
# Largest value the high_score INTEGER column holds on every backend
MAX_SCORE = 2**31 - 1


def coerce_score(value) -> int:
    """Normalize a client-submitted score.

    Missing -> 0, negative -> 0. Booleans, strings, fractional numbers and
    values above MAX_SCORE are rejected.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValidationError('currentScore must be a number')
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError('currentScore must be a whole number')
        value = int(value)
    if not isinstance(value, int):
        raise ValidationError('currentScore must be a number')
    if value > MAX_SCORE:
        raise ValidationError(f'currentScore must not exceed {MAX_SCORE}')
    return max(value, 0)


def _update_existing(claims: IdentityClaims, score: int) -> int:
    # Single statement so concurrent syncs cannot lose a higher score
    return Player.query.filter_by(external_id=claims.subject).update(
        {
            Player.name: claims.name,
            Player.picture: claims.picture,
            Player.high_score: case(
                (Player.high_score < score, score),
                else_=Player.high_score,
            ),
        },
        synchronize_session=False,
    )


def _insert_new(claims: IdentityClaims, score: int) -> None:
    player = Player(
        external_id=claims.subject,
        name=claims.name,
        picture=claims.picture,
        high_score=score,
    )
    db.session.add(player)
    db.session.commit()


def _upsert(claims: IdentityClaims, score: int) -> Player:
    if _update_existing(claims, score):
        db.session.commit()
    else:
        try:
            _insert_new(claims, score)
        except IntegrityError:
            # Another request created the record first
            db.session.rollback()
            current_app.logger.info(f"[sync-race] subject={claims.subject} insert lost, updating")
            _update_existing(claims, score)
            db.session.commit()
    return Player.query.filter_by(external_id=claims.subject).one()


def sync_score(verifier, token, submitted_score) -> Player:
    """Verify the player and keep the higher of the stored and submitted score."""
    if not token or not isinstance(token, str):
        current_app.logger.info("[sync-unauthorized] missing token")
        raise Unauthorized()
    try:
        claims = verifier.verify(token)
    except Unauthorized as exc:
        cause = exc.__cause__
        # google-auth messages may quote the token; log the type only
        reason = cause.__class__.__name__ if cause else 'rejected'
        current_app.logger.info(f"[sync-unauthorized] {reason}")
        raise
    score = coerce_score(submitted_score)

    ensure_connected()
    try:
        player = _upsert(claims, score)
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(
            f"[db-error] sync subject={claims.subject} {exc.__class__.__name__}: {exc}"
        )
        raise ServerError() from exc
    current_app.logger.info(
        f"[sync] subject={claims.subject} submitted={score} high_score={player.high_score}"
    )
    return player


def top_players(limit: int = DEFAULT_LEADERBOARD_LIMIT) -> List[Player]:
    if limit < 1:
        return []
    ensure_connected()
    try:
        return (
            Player.query
            .order_by(Player.high_score.desc(), Player.id.asc())
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[db-error] leaderboard {exc.__class__.__name__}: {exc}")
        raise ServerError() from exc
