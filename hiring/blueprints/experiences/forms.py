from wtforms import StringField, BooleanField
from wtforms.validators import DataRequired, Length

from ...utils.forms import JSONForm


class ExperienceForm(JSONForm):
    name = StringField("Name", validators=[DataRequired(), Length(min=1, max=120)])
    active = BooleanField("Active", false_values=(False, "false", "0", ""))
