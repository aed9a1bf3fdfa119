from wtforms import StringField, TextAreaField, BooleanField
from wtforms.validators import DataRequired, Length, Optional, URL

from ...utils.forms import JSONForm


class JobForm(JSONForm):
    title = StringField("Title", validators=[DataRequired(), Length(max=200)])
    designation = StringField("Designation", validators=[DataRequired(), Length(max=200)])
    salary_range = StringField("Salary range", validators=[DataRequired(), Length(max=100)])
    job_description = TextAreaField("Job description", validators=[DataRequired()])
    experience_in_year = StringField("Experience (years)", validators=[Optional(), Length(max=50)])
    task_link = StringField("Task link", validators=[Optional(), URL(require_tld=False)])
    is_active = BooleanField("Active", default=True, false_values=(False, "false", "0", ""))
