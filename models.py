"""
Models Module - Portfolio document and contact form schemas
The portfolio document is persisted as a single JSON file; these models
are the validation layer in front of it.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


PROJECT_CATEGORIES = ('web', 'mobile', 'api', 'game', 'graphics', 'system', 'devops', 'vr', 'all')


class Hero(BaseModel):
    greeting: str
    title: str
    description: str


class About(BaseModel):
    description: str


class Stat(BaseModel):
    value: str
    label: str


class Skill(BaseModel):
    name: str
    level: int = Field(ge=1, le=5)


class Skills(BaseModel):
    frontend: List[Skill]
    backend: List[Skill]
    tools: List[Skill]


class Project(BaseModel):
    id: str
    title: str
    description: str
    technologies: List[str]
    category: Literal['web', 'mobile', 'api', 'game', 'graphics', 'system', 'devops', 'vr', 'all']
    image_folder: str
    # Advisory only: the asset folder scan decides what is displayed
    images: Optional[List[str]] = None
    videos: Optional[List[str]] = None
    githubUrl: Optional[str] = None
    liveUrl: Optional[str] = None


class Contact(BaseModel):
    email: EmailStr
    phone: str
    location: str


class Social(BaseModel):
    githubUrl: Optional[str] = None
    linkedinUrl: Optional[str] = None
    twitterUrl: Optional[str] = None


class Portfolio(BaseModel):
    name: str
    hero: Hero
    about: About
    stats: List[Stat]
    skills: Skills
    projects: List[Project]
    contact: Contact
    social: Social
    resumeUrl: Optional[str] = None

    def to_document(self):
        """Plain JSON-ready dict, optional fields omitted when unset"""
        return self.model_dump(mode='json', exclude_none=True)


class ContactRequest(BaseModel):
    firstName: str
    lastName: str
    email: str
    message: str
    subject: Optional[str] = None
    emailTo: Optional[str] = None

    @field_validator('firstName', 'lastName', 'email', 'message')
    @classmethod
    def not_blank(cls, value):
        value = value.strip()
        if not value:
            raise ValueError('field is required')
        return value

    @field_validator('subject', 'emailTo')
    @classmethod
    def blank_to_none(cls, value):
        if value is None:
            return None
        return value.strip() or None

    @property
    def full_name(self):
        return f"{self.firstName} {self.lastName}"


__all__ = [
    'PROJECT_CATEGORIES',
    'Hero',
    'About',
    'Stat',
    'Skill',
    'Skills',
    'Project',
    'Contact',
    'Social',
    'Portfolio',
    'ContactRequest'
]
