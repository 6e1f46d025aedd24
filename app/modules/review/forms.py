from flask_wtf import FlaskForm
from wtforms import IntegerField, StringField, SubmitField, TextAreaField
from wtforms.validators import Length, Optional


class ReviewForm(FlaskForm):
    # required/range checks live in ReviewService so the JSON API reports the same messages
    name = StringField("Your Name", validators=[Length(max=100)])
    rating = IntegerField("Rating", default=0, validators=[Optional()])
    comment = TextAreaField("Comment", validators=[Length(max=2000)])
    submit = SubmitField("Submit Review")

    def get_review(self):
        return {
            "name": self.name.data,
            "rating": self.rating.data or 0,
            "comment": self.comment.data,
        }
