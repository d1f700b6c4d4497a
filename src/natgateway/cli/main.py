"""
Main CLI module with argument parsing and command execution.

Each subcommand builds a handler request from ``--data``/``--file`` (a full
request document, or a bare resource model used as the desired state),
runs the action through the application service and prints the final
progress event.
"""
import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from natgateway import __version__
from natgateway.application import NatGatewayService
from natgateway.cli.formatters import FORMATS, format_output
from natgateway.config.defaults import ConfigurationManager, LogLevel
from natgateway.domain.core.exceptions import DomainException
from natgateway.domain.handler import Action, ResourceHandlerRequest
from natgateway.domain.nat_gateway import ResourceModel
from natgateway.helpers.logger import setup_logging

logger = logging.getLogger(__name__)

# Keys that mark a document as a full request rather than a bare model
REQUEST_KEYS = {field.alias or name for name, field in ResourceHandlerRequest.model_fields.items()} | \
    set(ResourceHandlerRequest.model_fields)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog='natgw',
        description="Create, read, update, delete and list EC2 NAT gateways",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s create --data '{"SubnetId": "subnet-0abc", "AllocationId": "eipalloc-0abc"}'
  %(prog)s read nat-0123456789abcdef0
  %(prog)s update --file request.json
  %(prog)s delete nat-0123456789abcdef0 --no-wait
  %(prog)s list --format table
        """
    )

    parser.add_argument('--config', help='Configuration file path')
    parser.add_argument('--log-level', choices=[level.value for level in LogLevel],
                        help='Override the configured logging level')
    parser.add_argument('--format', choices=FORMATS, default='json', help='Output format')
    parser.add_argument('--region', help='AWS region (overrides configuration)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='action', help='Lifecycle actions')

    for action, help_text in (
        (Action.CREATE, 'Create a NAT gateway and wait until it is available'),
        (Action.READ, 'Show the current model of a NAT gateway'),
        (Action.UPDATE, 'Reconcile the tags of a NAT gateway'),
        (Action.DELETE, 'Delete a NAT gateway and wait until it is gone'),
    ):
        sub = subparsers.add_parser(action.value.lower(), help=help_text)
        if action != Action.CREATE:
            sub.add_argument('nat_gateway_id', nargs='?', help='NAT gateway identifier')
        _add_request_arguments(sub)

    list_parser = subparsers.add_parser('list', help='List NAT gateways, one page at a time')
    list_parser.add_argument('--next-token', help='Continuation token from a previous page')
    _add_request_arguments(list_parser)

    return parser


def _add_request_arguments(sub: argparse.ArgumentParser) -> None:
    source = sub.add_mutually_exclusive_group()
    source.add_argument('--data', help='Request or resource model as a JSON document')
    source.add_argument('--file', help='File holding the request or resource model (JSON or YAML)')
    sub.add_argument('--no-wait', action='store_true',
                     help='Return after a single invocation instead of waiting for stabilization')


def load_document(args: argparse.Namespace) -> Dict[str, Any]:
    """Load the ``--data``/``--file`` document, or an empty one."""
    if getattr(args, 'data', None):
        text = args.data
    elif getattr(args, 'file', None):
        with open(args.file, 'r') as f:
            text = f.read()
    else:
        return {}

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Request document is not valid JSON or YAML: {e}")
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError("Request document must be an object")
    return document


def build_request(args: argparse.Namespace) -> ResourceHandlerRequest:
    """
    Build the handler request for the parsed arguments.

    A document whose keys are all request fields is taken as a full request;
    anything else is treated as the desired resource model. A positional
    identifier and ``--next-token`` override the document.
    """
    document = load_document(args)
    if document and set(document) <= REQUEST_KEYS:
        request = ResourceHandlerRequest.model_validate(document)
    else:
        request = ResourceHandlerRequest.for_model(ResourceModel.model_validate(document) if document else None)

    nat_gateway_id = getattr(args, 'nat_gateway_id', None)
    if nat_gateway_id:
        model = request.desired_resource_state or ResourceModel()
        request = request.with_desired_state(model.with_identifier(nat_gateway_id))

    updates: Dict[str, Any] = {}
    if getattr(args, 'next_token', None):
        updates['next_token'] = args.next_token
    if args.region and not request.region:
        updates['region'] = args.region
    return request.model_copy(update=updates) if updates else request


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.action:
        parser.print_help(sys.stderr)
        return 2

    try:
        config_manager = ConfigurationManager(args.config)
        overrides: Dict[str, Any] = {}
        if args.log_level:
            overrides['LOGGING_CONFIG'] = {'level': args.log_level}
        if args.region:
            overrides['AWS_REGION'] = args.region
        if overrides:
            config_manager.update_config(overrides)

        app_config = config_manager.get_app_config()
        setup_logging(app_config.logging)

        request = build_request(args)
        service = NatGatewayService.from_config(config_manager)
        event = service.execute(Action(args.action.upper()), request, wait=not args.no_wait)
    except (DomainException, ValidationError, ValueError, OSError) as e:
        logger.error("Command failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 130

    print(format_output(event.to_dict(), args.format))
    return 1 if event.is_failed else 0


def run() -> None:
    """Console script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    run()
