from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, DecimalField
from wtforms.validators import DataRequired, Length, NumberRange, Optional


class VehicleForm(FlaskForm):
    """
    New vehicle: either a flat daily price, or all four price tiers.
    """
    name = StringField('Model', validators=[
        DataRequired(message='Model name is required'),
        Length(max=100)
    ])
    description = TextAreaField('Description', validators=[Optional()])
    daily_price = DecimalField('Daily price', validators=[Optional(), NumberRange(min=0)])
    price_6h = DecimalField('6 hours', validators=[Optional(), NumberRange(min=0)])
    price_12h = DecimalField('12 hours', validators=[Optional(), NumberRange(min=0)])
    price_24h = DecimalField('24 hours', validators=[Optional(), NumberRange(min=0)])
    price_48h = DecimalField('48 hours', validators=[Optional(), NumberRange(min=0)])

    TIER_FIELDS = ('price_6h', 'price_12h', 'price_24h', 'price_48h')

    def tier_prices(self):
        return [getattr(self, name).data for name in self.TIER_FIELDS]

    def validate(self, extra_validators=None):
        if not super().validate(extra_validators=extra_validators):
            return False

        tiers = self.tier_prices()
        if self.daily_price.data is None and any(p is None for p in tiers):
            self.daily_price.errors.append('Give a daily price or all four price tiers')
            return False
        if self.daily_price.data is not None and any(p is not None for p in tiers):
            self.daily_price.errors.append('Give either a daily price or price tiers, not both')
            return False
        return True
