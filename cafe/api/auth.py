# coding: utf8
from flask_restx import Namespace, Resource

from cafe.decorators import parameters
from cafe.services.auth import AuthService

ns = Namespace(name="auth", description="Customer auth API")


@ns.route("/register")
class APIRegister(Resource):

    @parameters(
        type="object",
        properties={
            "name": {"type": "string", "minLength": 1},
            "email": {"type": "string", "format": "email"},
            "mobile": {"type": "string"},
            "password": {"type": "string", "minLength": 6},
        },
        required=["name", "email", "password"],
    )
    def post(self, args):
        user = AuthService.register(
            args.get("name"),
            args.get("email"),
            args.get("password"),
            mobile=args.get("mobile", ""),
        )
        return {"token": AuthService.generate_token(user)}, 201


@ns.route("/login")
class APILogin(Resource):

    @parameters(
        type="object",
        properties={
            "email": {"type": "string"},
            "password": {"type": "string"},
        },
        required=["email", "password"],
    )
    def post(self, args):
        user = AuthService.login(args.get("email"), args.get("password"))
        return {"token": AuthService.generate_token(user)}
