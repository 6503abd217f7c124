from __future__ import annotations

import logging
from uuid import uuid4

from portfolio_api.application.ports.content_port import ContentPort
from portfolio_api.domain.entities.content import ProjectDraft, ServiceDraft, SkillDraft
from portfolio_api.application.use_cases.auth_common import utcnow


logger = logging.getLogger(__name__)

DEMO_SKILLS = (
    SkillDraft(name="HTML/CSS", level=93, icon="🎨", color="#E44D26", order=1),
    SkillDraft(name="JavaScript", level=88, icon="📝", color="#F7DF1E", order=2),
    SkillDraft(name="Python", level=95, icon="🐍", color="#3776AB", order=3),
    SkillDraft(name="React", level=85, icon="⚛️", color="#61DAFB", order=4),
    SkillDraft(name="Node.js", level=80, icon="🟢", color="#339933", order=5),
    SkillDraft(name="Data Science", level=90, icon="📊", color="#FF6B6B", order=6),
    SkillDraft(name="Machine Learning", level=87, icon="🤖", color="#4ECDC4", order=7),
    SkillDraft(name="SQL", level=85, icon="🗃️", color="#336791", order=8),
)

DEMO_SERVICES = (
    ServiceDraft(
        title="Software Development",
        icon="💻",
        description="Custom software solutions tailored to your business needs.",
        price="Starting at $2,500",
        features=("Custom Web Applications", "API Development", "Database Design", "Code Review"),
        order=1,
    ),
    ServiceDraft(
        title="Data Analysis & Visualization",
        icon="📊",
        description="Turn raw data into insights with analytics and visualizations.",
        price="Starting at $1,800",
        features=("Data Cleaning", "Statistical Analysis", "Interactive Dashboards", "Predictive Modeling"),
        order=2,
    ),
    ServiceDraft(
        title="Machine Learning Solutions",
        icon="🤖",
        description="Models that automate processes and support decisions.",
        price="Starting at $3,500",
        features=("Model Development", "Algorithm Optimization", "Deployment", "Monitoring"),
        order=3,
    ),
)

DEMO_PROJECTS = (
    ProjectDraft(
        title="Sales Prediction System",
        description="Model that forecasts sales trends to plan retail inventory.",
        technologies=("Python", "Scikit-learn", "Pandas", "Flask"),
        gradient_from="#667eea",
        gradient_to="#764ba2",
        github_url="https://github.com/example/sales-prediction",
        featured=True,
        order=1,
    ),
    ProjectDraft(
        title="Customer Analytics Dashboard",
        description="Dashboard with real-time insight into customer behavior.",
        technologies=("React", "D3.js", "Node.js"),
        gradient_from="#f093fb",
        gradient_to="#f5576c",
        github_url="https://github.com/example/analytics-dashboard",
        featured=True,
        order=2,
    ),
    ProjectDraft(
        title="Automated Trading Bot",
        description="Trading system driven by technical analysis and market sentiment.",
        technologies=("Python", "Pandas", "NumPy", "PostgreSQL"),
        gradient_from="#4facfe",
        gradient_to="#00f2fe",
        github_url="https://github.com/example/trading-bot",
        order=3,
    ),
)


def seed_demo_content(content_port: ContentPort) -> bool:
    """Insert demo skills, services and projects into an empty store.

    Returns False without writing anything when skills already exist.
    """
    if content_port.list_skills():
        logger.info("Content store already populated, skipping demo seed")
        return False

    now = utcnow()
    for draft in DEMO_SKILLS:
        content_port.create_skill(skill_id=str(uuid4()), draft=draft, now=now)
    for draft in DEMO_SERVICES:
        content_port.create_service(service_id=str(uuid4()), draft=draft, now=now)
    for draft in DEMO_PROJECTS:
        content_port.create_project(project_id=str(uuid4()), draft=draft, now=now)
    logger.info(
        "Seeded %d skills, %d services and %d projects",
        len(DEMO_SKILLS),
        len(DEMO_SERVICES),
        len(DEMO_PROJECTS),
    )
    return True
