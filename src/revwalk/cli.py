from __future__ import annotations

from pathlib import Path

import click
from dockerblade.stopwatch import Stopwatch
from loguru import logger

from revwalk.errors import RevWalkError
from revwalk.graph import CommitGraph
from revwalk.models.settings import Settings
from revwalk.revwalk import start_walk
from revwalk.stores.git import GitObjectStore

LOG_LEVELS = (
    "TRACE",
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS),
    default="WARNING",
    help="controls the logging level",
    envvar="REVWALK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    settings = Settings.from_env(log_level=log_level)
    logger.remove()
    logger.add(
        sink=click.get_text_stream("stderr"),
        level=settings.log_level,
    )
    if settings.log_to_file:
        settings.log_to_file.parent.mkdir(exist_ok=True, parents=True)
        logger.add(
            sink=settings.log_to_file,
            level=settings.log_level,
        )
    ctx.obj = settings


@cli.command("log")
@click.argument("revisions", nargs=-1)
@click.option(
    "--repo",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="the git repository whose history should be walked",
)
@click.option(
    "-p", "--path", "paths",
    multiple=True,
    help="only show commits that touch this path (repeatable)",
)
@click.option(
    "-n", "--max-count",
    type=click.IntRange(min=0),
    default=None,
    help="the maximum number of commits to show",
)
@click.option(
    "--parents/--no-parents",
    default=False,
    help="show the parents of each commit in the simplified history",
)
@click.option(
    "--time-limit",
    type=click.FloatRange(min=0),
    default=None,
    help="the maximum number of seconds to spend walking history",
)
@click.pass_obj
def do_log(
    settings: Settings,
    revisions: tuple[str, ...],
    repo: Path,
    paths: tuple[str, ...],
    max_count: int | None,
    parents: bool,
    time_limit: float | None,
) -> None:
    if time_limit is None:
        time_limit = settings.time_limit

    try:
        store = GitObjectStore.open(repo)
    except ValueError as err:
        raise click.ClickException(str(err)) from err

    timer = Stopwatch()
    timer.start()
    try:
        start_ids = [store.resolve(revision) for revision in revisions or ("HEAD",)]
        walk = start_walk(
            CommitGraph.for_store(store),
            start_ids,
            paths,
            max_count,
            settings=settings,
        )
        for commit in walk:
            line = f"{commit.id} : {commit.summary}"
            if parents:
                line = f"{line} [{' '.join(walk.effective_parents(commit.id))}]"
            click.echo(line)

            if time_limit is not None and timer.duration >= time_limit:
                logger.warning(f"stopping walk after reaching time limit ({time_limit:.2f} s)")
                walk.close()
                break
    except (RevWalkError, ValueError) as err:
        raise click.ClickException(str(err)) from err
