import argparse
import sys
from datetime import datetime

import boto3

from .awssigv4 import SigningError, add_signature_v4, sign_v2
from .config import settings
from .logging import root_logger
from .request import BasicRequest
from .sentry import init_sentry

logger = root_logger.getChild(__name__)


def resolve_credentials(access_key_id=None, secret_key=None, profile=None, need_key_id=True):
    """
    Explicit arguments win, then AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY settings, then the boto3
    credential chain (shared config files, instance metadata, ...). Each value is resolved on its own,
    a value given explicitly is never replaced.
    """
    access_key_id = access_key_id or settings.AWS_ACCESS_KEY_ID
    secret_key = secret_key or settings.AWS_SECRET_ACCESS_KEY
    if secret_key and (access_key_id or not need_key_id):
        return access_key_id, secret_key
    credentials = boto3.Session(profile_name=profile).get_credentials()
    if credentials is None:
        raise ValueError("You must specify an access key id and secret key")
    logger.info("Using credentials from boto3 session (%s)", credentials.method)
    frozen = credentials.get_frozen_credentials()
    return access_key_id or frozen.access_key, secret_key or frozen.secret_key


def _split(text, separator):
    name, sep, value = text.partition(separator)
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME{separator}VALUE, got {text!r}")
    return name.strip(), value


def _header(text):
    return _split(text, ":")


def _param(text):
    return _split(text, "=")


def _timestamp(text):
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid ISO 8601 timestamp {text!r}") from e


def build_parser():
    parser = argparse.ArgumentParser(prog="awsapi-sign", description="Sign AWS API requests")
    parser.add_argument("--key-id", help="Access key id", default=None)
    parser.add_argument("--key", help="Secret access key", default=None)
    parser.add_argument("--profile", help="boto3 profile used when no key is given", default=None)
    subparsers = parser.add_subparsers(dest="command", required=True)

    v4 = subparsers.add_parser("v4", help="Sign a request with Signature Version 4 and print its headers")
    v4.add_argument("--method", default="GET")
    v4.add_argument("--path", default="/", help="Relative uri, already encoded")
    v4.add_argument("--service", required=True)
    v4.add_argument("--region", default=settings.AWS_REGION)
    v4.add_argument("--header", "-H", type=_header, action="append", default=[], help="Name:Value, repeatable")
    v4.add_argument("--param", "-p", type=_param, action="append", default=[], help="name=value, repeatable")
    v4.add_argument("--data", default="", help="Request payload")
    v4.add_argument("--timestamp", type=_timestamp, default=None, help="ISO 8601, defaults to now")

    v2 = subparsers.add_parser("v2", help="Print the legacy Signature Version 2 of a string")
    v2.add_argument("string_to_sign")
    return parser


def cli(argv=None):
    args = build_parser().parse_args(argv)
    init_sentry()
    access_key_id, secret_key = resolve_credentials(
        args.key_id, args.key, args.profile, need_key_id=args.command != "v2"
    )
    try:
        if args.command == "v2":
            print(sign_v2(args.string_to_sign, secret_key))
            return 0
        request = BasicRequest(
            method=args.method,
            relative_uri=args.path,
            query_params=args.param,
            headers=args.header,
            payload=args.data,
        )
        add_signature_v4(request, args.service, args.region, access_key_id, secret_key, args.timestamp)
    except SigningError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    for name, value in request.headers:
        print(f"{name}: {value}")
    return 0


def main():
    sys.exit(cli())
