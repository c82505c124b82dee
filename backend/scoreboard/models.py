from scoreboard import db


class Player(db.Model):
    __tablename__ = 'player'
    id = db.Column(db.Integer, primary_key=True)
    # Google subject identifier; set once on first sync
    external_id = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=True)
    picture = db.Column(db.String(1024), nullable=True)
    high_score = db.Column(db.Integer, nullable=False, default=0, index=True)

    def to_leaderboard_dict(self):
        return {
            'name': self.name,
            'picture': self.picture,
            'highScore': self.high_score,
        }

    def __repr__(self):
        return f"<Player {self.external_id} high_score={self.high_score}>"
