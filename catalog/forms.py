"""Form rules for every create/update POST.

Each form trims its input as it is bound, runs its rules in declaration
order on the trimmed values, and then HTML-escapes every value whether or
not the rules passed, so a failed form can be re-rendered with sanitized
input.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, List, Mapping

from dateutil.parser import parse as dateparse
from markupsafe import escape
from werkzeug.datastructures import MultiDict
from wtforms import Field, Form, SelectField, SelectMultipleField, StringField, TextAreaField
from wtforms.validators import AnyOf, DataRequired, Length, Optional as OptionalValidator, ValidationError
from wtforms.widgets import DateInput

from .records import DEFAULT_STATUS, STATUS_CHOICES, iso_date


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


# --- Input normalization and sanitization ---

def as_list(value: Any) -> list:
    """Zero, one or many submitted values as a list.

    A lone string is one value, never a sequence of characters.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def to_formdata(data: Mapping[str, Any]) -> MultiDict:
    if isinstance(data, MultiDict):
        return data
    formdata = MultiDict()
    for key, value in (data or {}).items():
        for item in as_list(value):
            formdata.add(key, item)
    return formdata


def strip_whitespace(value):
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        return [strip_whitespace(item) for item in value]
    return value


def escape_html(value):
    # & < > " and ' become entities; nothing is removed
    if isinstance(value, str):
        return str(escape(value))
    if isinstance(value, list):
        return [escape_html(item) for item in value]
    return value


def parse_date(date_str: str) -> date:
    """Parse YYYY-MM-DD or YYYYMMDD, falling back to dateutil for anything else."""
    if not date_str:
        raise ValueError("Empty date")
    s = date_str.strip()
    for fmt in ("%Y-%m-%d", "%Y%m%d"):
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    try:
        return dateparse(s).date()
    except (ValueError, OverflowError) as exc:
        raise ValueError("Invalid date format; expected YYYY-MM-DD") from exc


TRIM = [strip_whitespace]


class LenientDateField(Field):
    """Optional date accepting whatever ``parse_date`` accepts."""

    widget = DateInput()

    def __init__(self, label=None, validators=None, message="Not a valid date value.", **kwargs):
        super().__init__(label, validators, **kwargs)
        self.message = message

    def _value(self):
        if self.raw_data:
            return " ".join(str(value) for value in self.raw_data)
        return iso_date(self.data)

    def process_formdata(self, valuelist):
        if not valuelist:
            return
        raw = valuelist[0]
        if isinstance(raw, date):
            self.data = raw
            return
        if not str(raw).strip():
            self.data = None
            return
        try:
            self.data = parse_date(str(raw))
        except ValueError:
            self.data = None
            raise ValueError(self.message)


class CatalogForm(Form):
    def validate(self, extra_validators=None):
        valid = super().validate(extra_validators)
        for field in self:
            field.data = escape_html(field.data)
        return valid

    @property
    def error_list(self) -> List[FieldError]:
        return [FieldError(name, message)
                for name, field in self._fields.items()
                for message in field.errors]


def bind(form_class, data: Mapping[str, Any]) -> CatalogForm:
    return form_class(formdata=to_formdata(data))


# --- Forms ---

class GenreForm(CatalogForm):
    name = StringField('Name', filters=TRIM, validators=[
        DataRequired('Genre name required'),
        Length(min=3, max=100, message='Genre name must be between 3 and 100 characters'),
    ])


class AuthorForm(CatalogForm):
    first_name = StringField('First name', filters=TRIM, validators=[
        DataRequired('First name must be specified.'),
        Length(max=100, message='First name must be at most 100 characters.'),
    ])
    family_name = StringField('Family name', filters=TRIM, validators=[
        DataRequired('Family name must be specified.'),
        Length(max=100, message='Family name must be at most 100 characters.'),
    ])
    date_of_birth = LenientDateField('Date of birth', validators=[OptionalValidator()],
                                     message='Invalid date of birth')
    date_of_death = LenientDateField('Date of death', validators=[OptionalValidator()],
                                     message='Invalid date of death')

    def validate_date_of_death(form, field):
        born = form.date_of_birth.data
        if field.data and born and field.data < born:
            raise ValidationError('Date of death cannot be before date of birth.')


class BookForm(CatalogForm):
    title = StringField('Title', filters=TRIM, validators=[DataRequired('Title must not be empty.')])
    author = StringField('Author', filters=TRIM, validators=[DataRequired('Author must not be empty.')])
    summary = TextAreaField('Summary', filters=TRIM, validators=[DataRequired('Summary must not be empty.')])
    isbn = StringField('ISBN', filters=TRIM, validators=[DataRequired('ISBN must not be empty.')])
    genre = SelectMultipleField('Genre', choices=[], validate_choice=False, filters=TRIM)


class BookInstanceForm(CatalogForm):
    book = StringField('Book', filters=TRIM, validators=[DataRequired('Book must be specified')])
    imprint = StringField('Imprint', filters=TRIM, validators=[DataRequired('Imprint must be specified')])
    due_back = LenientDateField('Date when book available', validators=[OptionalValidator()],
                                message='Invalid date')
    status = SelectField('Status', choices=[(s, s) for s in STATUS_CHOICES], default=DEFAULT_STATUS,
                         validate_choice=False, filters=TRIM,
                         validators=[AnyOf(STATUS_CHOICES, message='Invalid status')])
