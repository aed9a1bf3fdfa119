from wtforms import StringField, TextAreaField, IntegerField, SelectField
from wtforms.validators import DataRequired, Length, Optional

from ...statuses import InterviewType, InterviewLocation, InterviewResult, COMPLETION_RESULTS, values
from ...utils.forms import JSONForm


class ScheduleForm(JSONForm):
    candidate_id = IntegerField("Candidate", validators=[DataRequired()])
    interviewer_id = IntegerField("Interviewer", validators=[DataRequired()])
    scheduled_date = StringField("Date", validators=[DataRequired()])
    interview_type = SelectField("Type", choices=[(t, t) for t in values(InterviewType)],
                                 validators=[Optional()], validate_choice=False)
    location = SelectField("Location", choices=[(l, l) for l in values(InterviewLocation)],
                           validators=[Optional()], validate_choice=False)
    meeting_link = StringField("Meeting link", validators=[Optional(), Length(max=500)])
    notes = TextAreaField("Notes", validators=[Optional(), Length(max=2000)])


class RescheduleForm(JSONForm):
    scheduled_date = StringField("Date", validators=[DataRequired()])
    notes = TextAreaField("Notes", validators=[Optional(), Length(max=2000)])


class CancelForm(JSONForm):
    reason = TextAreaField("Reason", validators=[Optional(), Length(max=1000)])


class CompleteForm(JSONForm):
    result = SelectField("Result", choices=[(r.value, r.value) for r in InterviewResult if r in COMPLETION_RESULTS],
                         validators=[DataRequired()])
    feedback = TextAreaField("Feedback", validators=[Optional(), Length(max=4000)])
