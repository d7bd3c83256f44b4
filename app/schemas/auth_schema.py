from marshmallow import validate

from app.extensions.extensions import ma


class RegisterSchema(ma.Schema):
    username = ma.Str(required=True, validate=validate.Length(min=1, max=80))
    password = ma.Str(required=True, validate=validate.Length(min=8))
    name = ma.Str(validate=validate.Length(min=1))
    img_profile = ma.Str(data_key="imgProfile")


class LoginSchema(ma.Schema):
    username = ma.Str(required=True, validate=validate.Length(min=1))
    password = ma.Str(required=True, validate=validate.Length(min=1))


register_schema = RegisterSchema()
login_schema = LoginSchema()
