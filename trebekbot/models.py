from trebekbot import db
import time


class StateEntry(db.Model):
    __tablename__ = 'state_entry'
    key = db.Column(db.String(255), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    # Epoch seconds; NULL means the entry never expires
    expires_at = db.Column(db.Float, nullable=True, index=True)

    def is_expired(self, now=None):
        if self.expires_at is None:
            return False
        return self.expires_at <= (now if now is not None else time.time())
