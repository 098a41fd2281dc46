"""Resource command groups built on the REST invoker."""

from gh_commands.commands.base import CommandGroup
from gh_commands.commands.branches import BranchCommands
from gh_commands.commands.codespaces import CodespaceCommands
from gh_commands.commands.comments import CommentCommands
from gh_commands.commands.contents import ContentCommands
from gh_commands.commands.events import EventCommands
from gh_commands.commands.gists import GistCommands
from gh_commands.commands.issues import IssueCommands
from gh_commands.commands.labels import LabelCommands
from gh_commands.commands.milestones import MilestoneCommands
from gh_commands.commands.projects import ProjectCommands
from gh_commands.commands.repositories import RepositoryCommands
from gh_commands.commands.teams import TeamCommands
from gh_commands.commands.traffic import TrafficCommands
from gh_commands.commands.users import UserCommands

__all__ = [
    "BranchCommands",
    "CodespaceCommands",
    "CommandGroup",
    "CommentCommands",
    "ContentCommands",
    "EventCommands",
    "GistCommands",
    "IssueCommands",
    "LabelCommands",
    "MilestoneCommands",
    "ProjectCommands",
    "RepositoryCommands",
    "TeamCommands",
    "TrafficCommands",
    "UserCommands",
]
