import logging
import os
import re
from typing import Callable, Optional

from git import Actor, Repo
from git.exc import GitError

from codestats_readme.config import Config
from codestats_readme.pipeline import WriteOutcome

logger = logging.getLogger(__name__)

NOREPLY_DOMAIN = "users.noreply.github.com"


def author_for(username: str) -> Actor:
    slug = re.sub(r"[^A-Za-z0-9._-]+", "-", username.strip()).strip("-") or "codestats-bot"
    return Actor(username, f"{slug}@{NOREPLY_DOMAIN}")


def commit_and_push(config: Config, repo_dir: Optional[str] = None, push: bool = True) -> bool:
    """
    Commit the README with the configured message and author, then push origin.
    Returns True when a commit was made. Git failures are logged, not raised.
    """
    try:
        repo = Repo(repo_dir or os.getcwd(), search_parent_directories=True)
        if config.debug:
            logger.debug("::: Commit changes\n%s", repo.git.status())
        path = os.path.relpath(os.path.abspath(config.readme_file), repo.working_tree_dir)
        repo.index.add([path])
        if repo.head.is_valid() and not repo.index.diff("HEAD", paths=[path]):
            logger.info("%s unchanged, nothing to commit", path)
            return False
        author = author_for(config.git_username)
        commit = repo.index.commit(config.commit_message, author=author, committer=author)
        logger.info("Committed %s as %s", path, commit.hexsha[:7])
        if push:
            if "origin" not in [r.name for r in repo.remotes]:
                logger.warning("No 'origin' remote, skipping push")
                return True
            for info in repo.remote("origin").push():
                if info.flags & info.ERROR:
                    logger.error("Push failed: %s", info.summary.strip())
    except (GitError, OSError, ValueError) as e:
        logger.error("Git operations failed: %s", e)
        return False
    return True


def make_committer(config: Config, repo_dir: Optional[str] = None) -> Callable[[WriteOutcome], bool]:
    """Completion callback for update_document: decides whether the write outcome warrants a commit."""
    def on_complete(outcome: WriteOutcome) -> bool:
        if not outcome.read_ok:
            logger.warning("README was not read, nothing to commit")
            return False
        if not outcome.written and not config.commit_on_write_failure:
            logger.warning("README write failed, skipping commit")
            return False
        return commit_and_push(config, repo_dir=repo_dir)
    return on_complete
