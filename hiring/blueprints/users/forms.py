from wtforms import StringField, PasswordField, SelectField, BooleanField
from wtforms.validators import DataRequired, Email, Length, Optional

from ...statuses import Role, values
from ...utils.forms import JSONForm

ROLE_CHOICES = [(r, r) for r in values(Role)]


class UserCreateForm(JSONForm):
    name = StringField("Name", validators=[DataRequired(), Length(min=2, max=120)])
    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired(), Length(min=8)])
    role = SelectField("Role", choices=ROLE_CHOICES, validators=[DataRequired()])


class UserUpdateForm(JSONForm):
    name = StringField("Name", validators=[Optional(), Length(min=2, max=120)])
    role = SelectField("Role", choices=ROLE_CHOICES, validators=[Optional()], validate_choice=False)
    is_active = BooleanField("Active", false_values=(False, "false", "0", ""))
