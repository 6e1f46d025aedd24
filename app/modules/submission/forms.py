from flask_wtf import FlaskForm
from flask_wtf.file import FileAllowed, FileField, FileRequired
from wtforms import StringField, SubmitField
from wtforms.validators import URL, DataRequired, Length, Regexp

from app.modules.submission.models import EMAIL_RE, SUBMISSION_FIELDS


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class GameSubmissionForm(FlaskForm):
    full_name = StringField("Full Name", filters=[_strip], validators=[DataRequired(), Length(max=120)])
    adypu_email = StringField(
        "ADYPU Email",
        filters=[_strip],
        validators=[
            DataRequired(),
            Regexp(EMAIL_RE, message="Please enter a valid ADYPU email address (ending with @adypu.edu.in)"),
        ],
    )
    game_title = StringField("Game Title", filters=[_strip], validators=[DataRequired(), Length(max=120)])
    screenshot = FileField(
        "Game Screenshot",
        validators=[
            FileRequired(message="Game screenshot is required."),
            FileAllowed(["png", "jpg", "jpeg", "gif", "webp"], message="Screenshot must be an image."),
        ],
    )
    hosted_link = StringField("Game Hosted Link", filters=[_strip], validators=[DataRequired(), URL(require_tld=False)])
    github_link = StringField(
        "Game Github URL",
        filters=[_strip],
        validators=[
            DataRequired(),
            Regexp(
                r"^https://github\.com/.+",
                message="Please enter a valid GitHub URL (starting with https://github.com/)",
            ),
        ],
    )
    submit = SubmitField("Submit Game")

    def get_fields(self):
        return {name: getattr(self, name).data for name in SUBMISSION_FIELDS}
