from decimal import Decimal

from app import db


def credits_to_json(value):
    """Render a NUMERIC credits value as a JSON number."""
    if value is None:
        return 0
    value = Decimal(value)
    if not value.is_finite():
        # Unrepresentable in JSON; validation keeps these out of new writes
        return 0
    if value == value.to_integral_value():
        return int(value)
    return float(value)


class UserState(db.Model):
    __tablename__ = 'user_state'
    wallet = db.Column(db.Text, primary_key=True)
    credits = db.Column(db.Numeric, default=0, server_default='0')
    # Arbitrary-precision token amount, kept as text; existing tables were
    # created with an unquoted pendingTBT, which Postgres folds to lowercase
    pending_tbt = db.Column('pendingtbt', db.Text, default='0', server_default='0')

    def to_dict(self):
        return {
            'wallet': self.wallet,
            'credits': credits_to_json(self.credits),
            'pendingTBT': self.pending_tbt if self.pending_tbt is not None else '0',
        }

    def __repr__(self):
        return f'<UserState {self.wallet}>'
