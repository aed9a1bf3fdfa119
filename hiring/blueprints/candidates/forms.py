from wtforms import StringField, TextAreaField, BooleanField, SelectField
from wtforms.validators import DataRequired, Length, Optional

from ...statuses import CandidateStatus, values
from ...utils.forms import JSONForm


class EvaluationForm(JSONForm):
    # score is read raw from the body; the pipeline rejects non-integers
    comments = TextAreaField("Comments", validators=[Optional(), Length(max=2000)])


class StatusForm(JSONForm):
    status = SelectField("Status", choices=[(s, s) for s in values(CandidateStatus)], validators=[DataRequired()])
    note = StringField("Note", validators=[Optional(), Length(max=500)])


class FinalSelectionForm(JSONForm):
    selected = BooleanField("Selected", false_values=(False, "false", "0", ""))
    offer_letter_path = StringField("Offer letter", validators=[Optional(), Length(max=500)])
