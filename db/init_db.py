"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Projects: the top-level build season plan
CREATE TABLE IF NOT EXISTS projects (
    id              BIGSERIAL PRIMARY KEY,
    name            VARCHAR(255) NOT NULL,
    description     TEXT,
    start_date      DATE NOT NULL,
    goal_end_date   DATE,
    hard_deadline   DATE NOT NULL
);

-- Subteams: mechanical, programming, electrical, ...
CREATE TABLE IF NOT EXISTS subteams (
    id              BIGSERIAL PRIMARY KEY,
    name            VARCHAR(100) NOT NULL,
    color_code      VARCHAR(20),
    specialties     TEXT
);

-- Team members: the roster
CREATE TABLE IF NOT EXISTS team_members (
    id              BIGSERIAL PRIMARY KEY,
    username        VARCHAR(100) NOT NULL,
    first_name      VARCHAR(100),
    last_name       VARCHAR(100),
    email           VARCHAR(255),
    phone           VARCHAR(50),
    skills          TEXT,
    leader          BOOLEAN NOT NULL DEFAULT FALSE,
    subteam_id      BIGINT REFERENCES subteams(id) ON DELETE SET NULL
);

-- Subsystems: robot subsystems owned by a subteam
CREATE TABLE IF NOT EXISTS subsystems (
    id                      BIGSERIAL PRIMARY KEY,
    name                    VARCHAR(100) NOT NULL,
    description             TEXT,
    status                  VARCHAR(20) NOT NULL DEFAULT 'NOT_STARTED'
                            CHECK (status IN ('NOT_STARTED', 'IN_PROGRESS', 'COMPLETED', 'TESTING', 'ISSUES')),
    responsible_subteam_id  BIGINT REFERENCES subteams(id) ON DELETE SET NULL,
    responsible_member_id   BIGINT REFERENCES team_members(id) ON DELETE SET NULL
);

-- Tasks: units of work inside a project
CREATE TABLE IF NOT EXISTS tasks (
    id              BIGSERIAL PRIMARY KEY,
    project_id      BIGINT NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
    subsystem_id    BIGINT REFERENCES subsystems(id) ON DELETE SET NULL,
    title           VARCHAR(255) NOT NULL,
    description     TEXT,
    start_date      DATE,
    end_date        DATE,
    progress        INT NOT NULL DEFAULT 0 CHECK (progress BETWEEN 0 AND 100),
    priority        VARCHAR(10) NOT NULL DEFAULT 'MEDIUM'
                    CHECK (priority IN ('LOW', 'MEDIUM', 'HIGH', 'CRITICAL')),
    completed       BOOLEAN NOT NULL DEFAULT FALSE
);

-- Task <-> team member assignments
CREATE TABLE IF NOT EXISTS task_assignments (
    task_id         BIGINT NOT NULL REFERENCES tasks(id) ON DELETE CASCADE,
    team_member_id  BIGINT NOT NULL REFERENCES team_members(id) ON DELETE CASCADE,
    PRIMARY KEY (task_id, team_member_id)
);

-- Directed dependency edges between tasks
CREATE TABLE IF NOT EXISTS task_dependencies (
    id                      BIGSERIAL PRIMARY KEY,
    project_id              BIGINT NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
    prerequisite_task_id    BIGINT NOT NULL REFERENCES tasks(id) ON DELETE CASCADE,
    dependent_task_id       BIGINT NOT NULL REFERENCES tasks(id) ON DELETE CASCADE,
    dependency_type         VARCHAR(20) NOT NULL DEFAULT 'FINISH_TO_START'
                            CHECK (dependency_type IN ('FINISH_TO_START', 'START_TO_START', 'FINISH_TO_FINISH',
                                                       'START_TO_FINISH', 'BLOCKING', 'SOFT')),
    lag_hours               INT DEFAULT 0,
    critical_path           BOOLEAN NOT NULL DEFAULT FALSE,
    is_active               BOOLEAN NOT NULL DEFAULT TRUE,
    notes                   TEXT,
    created_at              TIMESTAMP DEFAULT NOW(),
    UNIQUE (prerequisite_task_id, dependent_task_id),
    CHECK (prerequisite_task_id <> dependent_task_id)
);

-- Components: purchased items required by tasks
CREATE TABLE IF NOT EXISTS components (
    id                  BIGSERIAL PRIMARY KEY,
    part_number         VARCHAR(100),
    name                VARCHAR(255) NOT NULL,
    description         TEXT,
    expected_delivery   DATE,
    actual_delivery     DATE,
    delivered           BOOLEAN NOT NULL DEFAULT FALSE
);

CREATE TABLE IF NOT EXISTS component_tasks (
    component_id    BIGINT NOT NULL REFERENCES components(id) ON DELETE CASCADE,
    task_id         BIGINT NOT NULL REFERENCES tasks(id) ON DELETE CASCADE,
    PRIMARY KEY (component_id, task_id)
);

-- Meetings: scheduled team sessions
CREATE TABLE IF NOT EXISTS meetings (
    id                      BIGSERIAL PRIMARY KEY,
    project_id              BIGINT NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
    title                   VARCHAR(255),
    date                    DATE NOT NULL,
    start_time              TIME NOT NULL,
    end_time                TIME NOT NULL,
    location                VARCHAR(255),
    virtual_meeting_url     VARCHAR(500),
    status                  VARCHAR(20) NOT NULL DEFAULT 'SCHEDULED'
                            CHECK (status IN ('SCHEDULED', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED', 'POSTPONED')),
    meeting_type            VARCHAR(30) NOT NULL DEFAULT 'TEAM_MEETING'
                            CHECK (meeting_type IN ('TEAM_MEETING', 'BUILD_SESSION', 'DESIGN_REVIEW',
                                                    'STRATEGY_SESSION', 'COMPETITION_PREP', 'OUTREACH')),
    priority                VARCHAR(10) NOT NULL DEFAULT 'MEDIUM'
                            CHECK (priority IN ('EMERGENCY', 'CRITICAL', 'HIGH', 'MEDIUM', 'LOW')),
    is_recurring            BOOLEAN NOT NULL DEFAULT FALSE,
    recurrence_pattern      VARCHAR(20),
    requires_preparation    BOOLEAN NOT NULL DEFAULT FALSE,
    action_items            TEXT,
    notes                   TEXT,
    created_by              VARCHAR(100),
    created_at              TIMESTAMP DEFAULT NOW()
);

-- Milestones: dated checkpoints of a project
CREATE TABLE IF NOT EXISTS milestones (
    id              BIGSERIAL PRIMARY KEY,
    project_id      BIGINT NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
    name            VARCHAR(255) NOT NULL,
    description     TEXT,
    date            DATE NOT NULL
);

-- Parts inventory
CREATE TABLE IF NOT EXISTS parts (
    id                  BIGSERIAL PRIMARY KEY,
    part_number         VARCHAR(100) NOT NULL,
    name                VARCHAR(255) NOT NULL,
    description         TEXT,
    category            VARCHAR(20) NOT NULL
                        CHECK (category IN ('DRIVETRAIN', 'STRUCTURAL', 'ELECTRONICS', 'PNEUMATICS', 'GAME_SPECIFIC',
                                            'FASTENERS', 'TOOLS', 'RAW_MATERIALS', 'SAFETY', 'OTHER')),
    quantity_on_hand    INT NOT NULL DEFAULT 0 CHECK (quantity_on_hand >= 0),
    minimum_stock       INT NOT NULL DEFAULT 0,
    safety_stock        INT NOT NULL DEFAULT 0,
    unit                VARCHAR(20),
    unit_cost           NUMERIC(12,2),
    vendor              VARCHAR(255),
    storage_location    VARCHAR(255),
    last_restock_date   DATE,
    last_used_date      DATE,
    lead_time_days      INT,
    is_active           BOOLEAN NOT NULL DEFAULT TRUE,
    is_consumable       BOOLEAN NOT NULL DEFAULT TRUE
);

-- Reusable subsystem project templates
CREATE TABLE IF NOT EXISTS project_templates (
    id                      BIGSERIAL PRIMARY KEY,
    name                    VARCHAR(255) NOT NULL,
    description             TEXT,
    subsystem_type          VARCHAR(20) NOT NULL
                            CHECK (subsystem_type IN ('DRIVETRAIN', 'INTAKE', 'SHOOTER', 'CLIMBER', 'ELEVATOR', 'ARM',
                                                      'ELECTRICAL', 'PNEUMATICS', 'VISION', 'CONTROLS', 'OTHER')),
    implementation_type     VARCHAR(255),
    estimated_weeks         INT NOT NULL DEFAULT 0,
    team_size               INT NOT NULL DEFAULT 0,
    difficulty_level        VARCHAR(20) NOT NULL DEFAULT 'INTERMEDIATE'
                            CHECK (difficulty_level IN ('BEGINNER', 'INTERMEDIATE', 'ADVANCED', 'EXPERT')),
    is_active               BOOLEAN NOT NULL DEFAULT TRUE,
    parallel_development    BOOLEAN NOT NULL DEFAULT TRUE,
    build_priority          INT NOT NULL DEFAULT 5,
    usage_count             INT NOT NULL DEFAULT 0,
    last_used_at            TIMESTAMP,
    created_by              VARCHAR(100),
    created_at              TIMESTAMP DEFAULT NOW()
);

-- FRC competition events, matches and rankings
CREATE TABLE IF NOT EXISTS frc_events (
    id              BIGSERIAL PRIMARY KEY,
    event_code      VARCHAR(20) NOT NULL,
    event_name      VARCHAR(255),
    season_year     INT NOT NULL,
    start_date      DATE,
    end_date        DATE,
    location        VARCHAR(255),
    UNIQUE (event_code, season_year)
);

CREATE TABLE IF NOT EXISTS frc_matches (
    id                      BIGSERIAL PRIMARY KEY,
    frc_event_id            BIGINT NOT NULL REFERENCES frc_events(id) ON DELETE CASCADE,
    match_number            INT NOT NULL,
    competition_level       VARCHAR(20) NOT NULL
                            CHECK (competition_level IN ('PRACTICE', 'QUALIFICATION', 'PLAYOFF')),
    scheduled_time          TIMESTAMP,
    actual_time             TIMESTAMP,
    red_alliance_teams      INT[] NOT NULL DEFAULT '{}',
    blue_alliance_teams     INT[] NOT NULL DEFAULT '{}',
    red_score               INT,
    blue_score              INT,
    UNIQUE (frc_event_id, competition_level, match_number)
);

CREATE TABLE IF NOT EXISTS frc_team_rankings (
    id              BIGSERIAL PRIMARY KEY,
    frc_event_id    BIGINT NOT NULL REFERENCES frc_events(id) ON DELETE CASCADE,
    team_number     INT NOT NULL,
    rank            INT NOT NULL,
    season_year     INT NOT NULL,
    wins            INT NOT NULL DEFAULT 0,
    losses          INT NOT NULL DEFAULT 0,
    ties            INT NOT NULL DEFAULT 0,
    ranking_points  NUMERIC(8,2),
    updated_at      TIMESTAMP DEFAULT NOW(),
    UNIQUE (frc_event_id, team_number)
);

-- Application users (authentication and COPPA compliance)
CREATE TABLE IF NOT EXISTS users (
    id                          BIGSERIAL PRIMARY KEY,
    username                    VARCHAR(50) NOT NULL,
    password_hash               VARCHAR(255),
    email                       VARCHAR(255) NOT NULL,
    first_name                  VARCHAR(100),
    last_name                   VARCHAR(100),
    role                        VARCHAR(20) NOT NULL
                                CHECK (role IN ('STUDENT', 'MENTOR', 'ADMIN', 'PARENT')),
    enabled                     BOOLEAN NOT NULL DEFAULT TRUE,
    account_non_expired         BOOLEAN NOT NULL DEFAULT TRUE,
    account_non_locked          BOOLEAN NOT NULL DEFAULT TRUE,
    credentials_non_expired     BOOLEAN NOT NULL DEFAULT TRUE,
    age                         INT,
    requires_parental_consent   BOOLEAN NOT NULL DEFAULT FALSE,
    parental_consent_date       TIMESTAMP,
    parental_consent_token      VARCHAR(255),
    parent_email                VARCHAR(255),
    totp_secret                 VARCHAR(255),
    mfa_enabled                 BOOLEAN NOT NULL DEFAULT FALSE,
    created_at                  TIMESTAMP DEFAULT NOW(),
    updated_at                  TIMESTAMP DEFAULT NOW(),
    last_login                  TIMESTAMP
);

-- Case-insensitive uniqueness
CREATE UNIQUE INDEX IF NOT EXISTS uq_parts_part_number ON parts (LOWER(part_number));
CREATE UNIQUE INDEX IF NOT EXISTS uq_components_part_number ON components (LOWER(part_number));
CREATE UNIQUE INDEX IF NOT EXISTS uq_subsystems_name ON subsystems (LOWER(name));
CREATE UNIQUE INDEX IF NOT EXISTS uq_subteams_name ON subteams (LOWER(name));
CREATE UNIQUE INDEX IF NOT EXISTS uq_team_members_username ON team_members (LOWER(username));
CREATE UNIQUE INDEX IF NOT EXISTS uq_team_members_email ON team_members (LOWER(email));
CREATE UNIQUE INDEX IF NOT EXISTS uq_users_username ON users (LOWER(username));
CREATE UNIQUE INDEX IF NOT EXISTS uq_users_email ON users (LOWER(email));
CREATE UNIQUE INDEX IF NOT EXISTS uq_users_consent_token ON users (parental_consent_token)
    WHERE parental_consent_token IS NOT NULL;

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_tasks_project ON tasks(project_id, completed);
CREATE INDEX IF NOT EXISTS idx_tasks_subsystem ON tasks(subsystem_id);
CREATE INDEX IF NOT EXISTS idx_task_assignments_member ON task_assignments(team_member_id);
CREATE INDEX IF NOT EXISTS idx_task_dependencies_project ON task_dependencies(project_id) WHERE is_active = TRUE;
CREATE INDEX IF NOT EXISTS idx_component_tasks_task ON component_tasks(task_id);
CREATE INDEX IF NOT EXISTS idx_meetings_date ON meetings(date, start_time);
CREATE INDEX IF NOT EXISTS idx_meetings_project ON meetings(project_id, date);
CREATE INDEX IF NOT EXISTS idx_milestones_project ON milestones(project_id, date);
CREATE INDEX IF NOT EXISTS idx_parts_active_category ON parts(category) WHERE is_active = TRUE;
CREATE INDEX IF NOT EXISTS idx_frc_matches_event ON frc_matches(frc_event_id, scheduled_time);
CREATE INDEX IF NOT EXISTS idx_frc_rankings_team ON frc_team_rankings(team_number, season_year);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool, close_pool
    init_pool()
    try:
        create_tables()
    finally:
        close_pool()
    print("Database schema created successfully.")
