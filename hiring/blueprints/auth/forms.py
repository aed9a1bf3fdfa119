from wtforms import StringField, PasswordField
from wtforms.validators import DataRequired, Email

from ...utils.forms import JSONForm


class LoginForm(JSONForm):
    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired()])
