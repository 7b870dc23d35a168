"""
repositories/ - Data Access Layer
==================================
One read-only repository per entity. Each encapsulates the SQL queries for
its table, validates parameters before touching the database and returns
domain model objects.
"""

from repositories.base import InvalidQueryError
from repositories.component_repo import ComponentRepository
from repositories.frc_match_repo import FrcMatchRepository
from repositories.frc_ranking_repo import FrcTeamRankingRepository
from repositories.meeting_repo import MeetingRepository
from repositories.milestone_repo import MilestoneRepository
from repositories.part_repo import PartRepository
from repositories.project_repo import ProjectRepository
from repositories.project_template_repo import ProjectTemplateRepository
from repositories.subsystem_repo import SubsystemRepository
from repositories.subteam_repo import SubteamRepository
from repositories.task_repo import TaskRepository
from repositories.team_member_repo import TeamMemberRepository
from repositories.user_repo import UserRepository

__all__ = [
    "InvalidQueryError",
    "ComponentRepository",
    "FrcMatchRepository",
    "FrcTeamRankingRepository",
    "MeetingRepository",
    "MilestoneRepository",
    "PartRepository",
    "ProjectRepository",
    "ProjectTemplateRepository",
    "SubsystemRepository",
    "SubteamRepository",
    "TaskRepository",
    "TeamMemberRepository",
    "UserRepository",
]
