"""Checkout command - switch branches or restore files."""

import click

from sprig.core.errors import InvalidOperands
from sprig.cli.output import reports_errors
from sprig.cli.workspace import open_workspace, to_repo_path

SEPARATOR = '--'


class CheckoutCommand(click.Command):
    """Remembers where `--` appeared, since click drops it from the operands."""

    def parse_args(self, ctx, args):
        args = list(args)
        ctx.meta['checkout.separator'] = (
            args.index(SEPARATOR) if SEPARATOR in args else None
        )
        return super().parse_args(ctx, args)


@click.command('checkout', cls=CheckoutCommand)
@click.argument('operands', nargs=-1)
@click.pass_context
@reports_errors
def checkout_cmd(ctx, operands):
    """
    Switch branches or restore a file.

    \b
    Forms:
        sprig checkout BRANCH            switch to BRANCH
        sprig checkout -- FILE           restore FILE from the current commit
        sprig checkout COMMIT -- FILE    restore FILE from COMMIT

    Switching branches replaces every tracked file with the branch's
    version and clears the staging area. Restoring a file does not
    stage it. COMMIT may be abbreviated.
    """
    separator = ctx.meta.get('checkout.separator')
    workspace = open_workspace()

    if separator is None and len(operands) == 1:
        workspace.checkout_branch(operands[0])
    elif separator == 0 and len(operands) == 1:
        workspace.checkout_file(to_repo_path(workspace, operands[0]))
    elif separator == 1 and len(operands) == 2:
        commit_id, path = operands
        workspace.checkout_file(to_repo_path(workspace, path), commit_id)
    else:
        raise InvalidOperands()
