"""Terraform command construction."""

from lazytf.models import InitOptions

TERRAFORM_BINARY = "terraform"


def build_init_args(options: InitOptions) -> list[str]:
    """Return the ``terraform`` arguments for an init with *options*.

    >>> build_init_args(InitOptions(reconfigure=True))
    ['init', '-reconfigure', '-input=false']
    """
    args = ["init"]
    if options.backend_config_file is not None:
        args.append(f"-backend-config={options.backend_config_file.full_path}")
    if options.reconfigure:
        args.append("-reconfigure")
    if options.upgrade:
        args.append("-upgrade")
    if not options.allow_input:
        args.append("-input=false")
    return args


def init_invocation(project_path: str, options: InitOptions) -> tuple[str, list[str], str]:
    """Return ``(command, args, cwd)`` for running init inside *project_path*."""
    return TERRAFORM_BINARY, build_init_args(options), project_path
