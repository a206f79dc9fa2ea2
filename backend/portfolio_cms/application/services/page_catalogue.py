"""Page catalogue — which collections, text fields and feeds each page shows,
plus the hard-coded default content used when the remote store is empty."""

from collections.abc import Callable
from dataclasses import dataclass

from portfolio_cms.domain.entities import (
    Achievement,
    Certification,
    Collection,
    Education,
    EntityRecord,
    Experience,
    Project,
    QuickLink,
    Skill,
    SocialLink,
)


class Page:
    HOME = "home"
    ABOUT = "about"
    PROJECTS = "projects"
    ACHIEVEMENTS = "achievements"
    CERTIFICATIONS = "certifications"
    BLOG = "blog"


class Feed:
    BLOG = "blog"
    BADGES = "badges"


@dataclass(frozen=True)
class TextFieldSpec:
    """One editable page text.

    ``remote_field`` names the home-data column backing the field; when it is
    ``None`` the field is local-only and lives under ``local_key``.
    """

    name: str
    local_key: str
    default: str
    remote_field: str | None = None
    multiline: bool = True


@dataclass(frozen=True)
class PageSpec:
    name: str
    collections: tuple[Collection, ...] = ()
    text_fields: tuple[TextFieldSpec, ...] = ()
    feeds: tuple[str, ...] = ()
    shows_profile_photo: bool = False

    def text_field(self, name: str) -> TextFieldSpec | None:
        return next((f for f in self.text_fields if f.name == name), None)


# ── Default collection content ──────────────────────────────────────

def _quick_links() -> list[EntityRecord]:
    return [
        QuickLink(
            title="About Me",
            description="Learn about my cybersecurity background, skills, and expertise",
            link="/about",
        ),
        QuickLink(
            title="Security Projects",
            description="Explore my security tools, penetration testing, and research projects",
            link="/projects",
        ),
        QuickLink(
            title="Security Blog",
            description="Read my latest security research, tutorials, and vulnerability analyses",
            link="/blog",
        ),
        QuickLink(
            title="CTF Achievements",
            description="Check out my Capture The Flag wins and security competition results",
            link="/achievements",
        ),
        QuickLink(
            title="Certifications",
            description="View my cybersecurity certifications and security badges",
            link="/certifications",
        ),
    ]


def _social_links() -> list[EntityRecord]:
    return [SocialLink(platform=name) for name in ("Email", "LinkedIn", "GitHub", "TryHackMe")]


def _skills() -> list[EntityRecord]:
    return [
        Skill(name="Penetration Testing", icon="🔓",
              description="Ethical hacking and vulnerability assessment"),
        Skill(name="Network Security", icon="🌐",
              description="Firewall configuration, IDS/IPS, network analysis"),
        Skill(name="Python", icon="🐍",
              description="Security scripting, automation, and tool development"),
        Skill(name="Linux/Unix", icon="🐧",
              description="System administration and security hardening"),
        Skill(name="Wireshark", icon="📡",
              description="Network traffic analysis and packet inspection"),
        Skill(name="Metasploit", icon="⚔️",
              description="Penetration testing framework and exploitation"),
        Skill(name="Web Security", icon="🛡️",
              description="OWASP Top 10, SQL injection, XSS prevention"),
    ]


def _experience() -> list[EntityRecord]:
    return [
        Experience(
            title="Cybersecurity Intern",
            company="Security Firm",
            date="2023 - Present",
            description="Assisting in security assessments, vulnerability scanning, and penetration testing.",
            responsibilities=[
                "Conducted vulnerability assessments and penetration tests",
                "Analyzed security logs and identified potential threats",
                "Assisted in developing security policies and procedures",
                "Participated in incident response and security monitoring",
            ],
        ),
        Experience(
            title="Security Researcher",
            company="Bug Bounty Programs",
            date="2022 - Present",
            description="Identifying and reporting security vulnerabilities in web applications.",
            responsibilities=[
                "Discovered and reported multiple critical vulnerabilities",
                "Collaborated with security teams to remediate issues",
                "Researched new attack vectors and security techniques",
                "Contributed to security awareness and training programs",
            ],
        ),
    ]


def _education() -> list[EntityRecord]:
    return [
        Education(
            degree="Bachelor of Science in Cybersecurity",
            institution="University Name",
            date="2020 - Present",
            description="Focus on network security, cryptography, ethical hacking, and digital forensics.",
        ),
        Education(
            degree="Cybersecurity Certification Program",
            institution="Security Training Institute",
            date="2023",
            description="Comprehensive training in penetration testing, incident response, and security analysis.",
        ),
    ]


def _projects() -> list[EntityRecord]:
    return [
        Project(
            title="Network Scanner Tool",
            description=(
                "A Python-based network scanning tool for discovering hosts, open ports, and "
                "services on a network. Features include port scanning, service detection, "
                "and vulnerability assessment."
            ),
            categories=["Pentesting", "Network"],
            technologies=["Python", "Scapy", "Nmap", "Linux"],
            github="https://github.com/example",
        ),
        Project(
            title="Password Security Analyzer",
            description=(
                "A security tool that analyzes password strength, checks for common "
                "vulnerabilities, and tests against known password dictionaries."
            ),
            categories=["Security", "Pentesting"],
            technologies=["Python", "Hashcat", "Cryptography", "CLI"],
            github="https://github.com/example",
        ),
        Project(
            title="Web Vulnerability Scanner",
            description=(
                "An automated web application security scanner that detects common "
                "vulnerabilities like SQL injection, XSS, CSRF, and other OWASP Top 10 issues."
            ),
            categories=["Web Security", "Pentesting"],
            technologies=["Python", "Requests", "BeautifulSoup", "OWASP"],
            github="https://github.com/example",
        ),
        Project(
            title="CTF Challenge Platform",
            description=(
                "A Capture The Flag platform for hosting security challenges, including "
                "crypto, web, forensics, and reverse engineering challenges."
            ),
            categories=["CTF", "Web Development"],
            technologies=["Docker", "Python", "Flask", "Linux"],
            github="https://github.com/example",
        ),
    ]


def _achievements() -> list[EntityRecord]:
    return [
        Achievement(
            icon="🏆",
            title="CTF Competition Winner",
            description=(
                "Won first place in a national Capture The Flag competition, solving "
                "challenges in web security, cryptography, and reverse engineering."
            ),
            date="March 2023",
            link="https://example.com",
        ),
        Achievement(
            icon="🔓",
            title="Bug Bounty Hunter",
            description=(
                "Discovered and responsibly disclosed 15+ critical security vulnerabilities "
                "across various platforms."
            ),
            date="2023",
            link="https://hackerone.com",
        ),
        Achievement(
            icon="🔐",
            title="Security Tool Developer",
            description="Developed and open-sourced security tools used by the cybersecurity community.",
            date="2022 - 2023",
            link="https://github.com",
        ),
    ]


def _certifications() -> list[EntityRecord]:
    return [
        Certification(
            name="Certified Ethical Hacker (CEH)",
            issuer="EC-Council",
            date="December 2023",
            description="Validates skills in ethical hacking, penetration testing, and security assessment methodologies.",
            url="https://example.com",
        ),
        Certification(
            name="CompTIA Security+",
            issuer="CompTIA",
            date="November 2023",
            description=(
                "Demonstrates foundational cybersecurity skills including threat management, "
                "cryptography, and network security."
            ),
            url="https://example.com",
        ),
        Certification(
            name="Web Application Security",
            issuer="PortSwigger Web Security Academy",
            date="July 2023",
            description="Completed comprehensive training in web application security and OWASP Top 10.",
            url="https://portswigger.net",
        ),
    ]


_DEFAULTS: dict[Collection, Callable[[], list[EntityRecord]]] = {
    Collection.QUICK_LINKS: _quick_links,
    Collection.SOCIAL_LINKS: _social_links,
    Collection.SKILLS: _skills,
    Collection.EXPERIENCE: _experience,
    Collection.EDUCATION: _education,
    Collection.PROJECTS: _projects,
    Collection.ACHIEVEMENTS: _achievements,
    Collection.CERTIFICATIONS: _certifications,
}


def default_collection(collection: Collection) -> list[EntityRecord]:
    """A fresh copy of the hard-coded content for ``collection``."""
    return _DEFAULTS[Collection(collection)]()


# ── Pages ───────────────────────────────────────────────────────────

PAGES: dict[str, PageSpec] = {
    spec.name: spec
    for spec in (
        PageSpec(
            Page.HOME,
            collections=(Collection.QUICK_LINKS, Collection.SOCIAL_LINKS),
            text_fields=(
                TextFieldSpec("name", "home-name", "Your Name", remote_field="name", multiline=False),
                TextFieldSpec(
                    "subtitle",
                    "home-subtitle",
                    "Cybersecurity Student | Ethical Hacker | Security Researcher",
                    remote_field="subtitle",
                    multiline=False,
                ),
                TextFieldSpec(
                    "description",
                    "home-description",
                    "Welcome to my security portfolio! I'm passionate about protecting digital "
                    "assets, identifying vulnerabilities, and securing systems.",
                    remote_field="description",
                ),
            ),
            shows_profile_photo=True,
        ),
        PageSpec(
            Page.ABOUT,
            collections=(Collection.SKILLS, Collection.EXPERIENCE, Collection.EDUCATION),
            text_fields=(
                TextFieldSpec(
                    "about_intro",
                    "about-intro",
                    "Hello! I'm a cybersecurity student passionate about protecting digital "
                    "assets and securing systems.",
                    remote_field="about_intro",
                ),
                TextFieldSpec(
                    "about_description",
                    "about-description",
                    "When I'm not studying security vulnerabilities, I enjoy participating in "
                    "CTF competitions and contributing to security tools.",
                    remote_field="about_description",
                ),
            ),
            shows_profile_photo=True,
        ),
        PageSpec(
            Page.PROJECTS,
            collections=(Collection.PROJECTS,),
            text_fields=(
                TextFieldSpec(
                    "projects_description",
                    "projects-subtitle",
                    "A collection of projects I've worked on, showcasing my skills and creativity",
                    remote_field="projects_description",
                ),
            ),
        ),
        PageSpec(
            Page.ACHIEVEMENTS,
            collections=(Collection.ACHIEVEMENTS,),
            text_fields=(
                TextFieldSpec(
                    "subtitle",
                    "achievements-subtitle",
                    "Milestones and accomplishments throughout my journey",
                ),
            ),
        ),
        PageSpec(
            Page.CERTIFICATIONS,
            collections=(Collection.CERTIFICATIONS,),
            text_fields=(
                TextFieldSpec(
                    "subtitle",
                    "certifications-subtitle",
                    "Professional certifications and achievements earned through learning and dedication",
                ),
            ),
            feeds=(Feed.BADGES,),
        ),
        PageSpec(
            Page.BLOG,
            text_fields=(
                TextFieldSpec(
                    "subtitle",
                    "blog-subtitle",
                    "Security research, tutorials, and insights from Medium",
                ),
            ),
            feeds=(Feed.BLOG,),
        ),
    )
}


def get_page(name: str) -> PageSpec | None:
    return PAGES.get(name)
