"""Command line interface for DebtSage."""

from __future__ import annotations

import json
import logging

import click

from .config import BaseConfig
from .errors import InvalidInputError
from .forms import DEFAULT_STRATEGIES, PlanForm, parse_debt_spec
from .infra.repositories import InMemoryDebtRepository
from .logging_config import setup_logging
from .services.debts import PlanResult, describe_timeframe, schedule_summary
from .services.planning import compare_for_user, plan_for_user

CLI_USER = "cli"
EXIT_NOT_CONVERGED = 3

_debt_option = click.option(
    "--debt",
    "debt_specs",
    multiple=True,
    required=True,
    metavar="NAME:PRINCIPAL:APR[:MIN]",
    help="Debt to include; repeat for each debt. APR is a percentage.",
)
_budget_option = click.option(
    "--budget", required=True, help="Total amount available for debt payments each month."
)
_max_months_option = click.option(
    "--max-months",
    type=click.IntRange(min=1),
    default=None,
    help="Stop simulating after this many months (default from DEBTSAGE_MAX_MONTHS).",
)


def _currency(amount: float | None) -> str:
    return f"${(amount or 0.0):,.2f}"


def _load_repository(debt_specs: tuple[str, ...]) -> InMemoryDebtRepository:
    """Validate every --debt token and store it for the CLI user."""

    repository = InMemoryDebtRepository()
    for spec in debt_specs:
        try:
            form = parse_debt_spec(spec)
        except InvalidInputError as exc:
            raise click.BadParameter(str(exc), param_hint="--debt") from exc
        if not form.validate():
            details = "; ".join(f"{key}: {', '.join(msgs)}" for key, msgs in form.errors.items())
            raise click.BadParameter(f"{spec!r} ({details})", param_hint="--debt")
        repository.put(form.to_debt(repository.next_id()), user_id=CLI_USER)
    return repository


def _parse_plan_form(budget: str, strategy: str) -> PlanForm:
    form = PlanForm(monthly_budget=budget, strategy=strategy)
    if not form.validate(strategies=DEFAULT_STRATEGIES):
        if "monthly_budget" in form.errors:
            raise click.BadParameter("; ".join(form.errors["monthly_budget"]), param_hint="--budget")
        raise click.BadParameter("; ".join(form.error_messages), param_hint="--strategy")
    return form


def _echo_summary(result: PlanResult) -> None:
    months, interest, paid = schedule_summary(result)
    click.echo(f"Strategy:        {result.strategy.value}")
    if result.converged:
        click.echo(f"Debt free in:    {describe_timeframe(months)} ({months} months)")
    else:
        click.echo(f"Simulated:       {months} months without paying off every debt")
    click.echo(f"Total interest:  {_currency(interest)}")
    click.echo(f"Total paid:      {_currency(paid)}")
    click.echo(f"Monthly payment: {_currency(result.monthly_budget)}")


def _echo_schedule(result: PlanResult) -> None:
    for row in result.schedule:
        click.echo(
            f"{row.month:>4}  interest {_currency(row.interest_accrued):>12}"
            f"  principal {_currency(row.principal_paid):>12}"
            f"  remaining {_currency(row.remaining_balance):>12}"
        )
        for payment in row.payments:
            click.echo(
                f"        {payment.name}: min {_currency(payment.minimum_applied)}"
                f" extra {_currency(payment.extra_applied)}"
            )


def _warn_not_converged(result: PlanResult) -> None:
    click.echo(
        f"Plan did not converge within {result.total_months} months; "
        f"{_currency(result.remaining_balance)} still outstanding.",
        err=True,
    )


@click.group()
@click.option("--verbose", is_flag=True, default=False, help="Echo info-level logs to stderr.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Plan debt payoff with the avalanche or snowball strategy."""

    try:
        config = BaseConfig()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(config, console_level=logging.INFO if verbose else logging.WARNING)
    ctx.obj = config


@main.command("plan")
@_debt_option
@_budget_option
@click.option(
    "--strategy",
    type=click.Choice(sorted(DEFAULT_STRATEGIES), case_sensitive=False),
    default=None,
    help="Payoff strategy (default from DEBTSAGE_DEFAULT_STRATEGY).",
)
@_max_months_option
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the full plan as JSON.")
@click.option(
    "--schedule", "show_schedule", is_flag=True, default=False, help="Print every month."
)
@click.pass_context
def plan_command(
    ctx: click.Context,
    debt_specs: tuple[str, ...],
    budget: str,
    strategy: str | None,
    max_months: int | None,
    as_json: bool,
    show_schedule: bool,
) -> None:
    """Simulate a payoff plan for the given debts."""

    config: BaseConfig = ctx.obj
    repository = _load_repository(debt_specs)
    form = _parse_plan_form(budget, strategy or config.DEFAULT_STRATEGY)

    try:
        result = plan_for_user(
            repository=repository,
            user_id=CLI_USER,
            monthly_budget=float(form.monthly_budget),
            strategy=form.strategy,
            max_months=max_months,
            config=config,
        )
    except InvalidInputError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _echo_summary(result)
        if show_schedule:
            _echo_schedule(result)

    if not result.converged:
        _warn_not_converged(result)
        ctx.exit(EXIT_NOT_CONVERGED)


@main.command("compare")
@_debt_option
@_budget_option
@_max_months_option
@click.pass_context
def compare_command(
    ctx: click.Context,
    debt_specs: tuple[str, ...],
    budget: str,
    max_months: int | None,
) -> None:
    """Compare avalanche and snowball for the given debts."""

    config: BaseConfig = ctx.obj
    repository = _load_repository(debt_specs)
    form = _parse_plan_form(budget, config.DEFAULT_STRATEGY)

    try:
        comparison = compare_for_user(
            repository=repository,
            user_id=CLI_USER,
            monthly_budget=float(form.monthly_budget),
            max_months=max_months,
            config=config,
        )
    except InvalidInputError as exc:
        raise click.ClickException(str(exc)) from exc

    for result in (comparison.avalanche, comparison.snowball):
        _echo_summary(result)
        click.echo("")

    recommended = comparison.recommended
    savings = abs(comparison.interest_savings)
    click.echo(f"Recommended:     {recommended.value} (interest difference {_currency(savings)})")

    if not comparison.plan_for(recommended).converged:
        _warn_not_converged(comparison.plan_for(recommended))
        ctx.exit(EXIT_NOT_CONVERGED)


if __name__ == "__main__":  # pragma: no cover
    main()
