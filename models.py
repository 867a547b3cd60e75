from typing import List

from flask_sqlalchemy import SQLAlchemy
from pydantic import BaseModel, ConfigDict, Field
from werkzeug.security import generate_password_hash, check_password_hash

db = SQLAlchemy()


class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_public(self):
        """Fields safe to send to the client. Never includes the hash."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
        }

    def __repr__(self):
        return f'<User {self.username}>'


# Tasks live in the client's local storage, not in the database. They are
# serialized with camelCase keys, so fields carry aliases.

class Subtask(BaseModel):
    id: int
    title: str
    completed: bool = False


class Task(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    description: str = ""
    completed: bool = False
    important: bool = False
    reward: str = ""
    reward_taken: bool = Field(default=False, alias="rewardTaken")
    subtasks: List[Subtask] = Field(default_factory=list)
    created_at: int = Field(alias="createdAt")

    @property
    def priority(self):
        """Visual priority: completed wins over important."""
        if self.completed:
            return "completed"
        if self.important:
            return "important"
        return "normal"

    def to_storage(self):
        return self.model_dump(by_alias=True)

    def __repr__(self):
        return f'<Task {self.title}>'
