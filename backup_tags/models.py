"""
Data model for the tags database (tags.json).
Targets are a discriminated union on "type": Backup or Save.
"""
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Tag(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    color: str  # hex color like "#FF5733"


class BackupTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["Backup"] = "Backup"
    save_name: str
    backup_name: str


class SaveTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["Save"] = "Save"
    relative_path: str


TagTarget = Annotated[Union[BackupTarget, SaveTarget], Field(discriminator="type")]


class TagAssociation(BaseModel):
    target: TagTarget
    tag_names: list[str] = Field(default_factory=list)


class TagsDatabase(BaseModel):
    tags: list[Tag] = Field(default_factory=list)
    associations: list[TagAssociation] = Field(default_factory=list)

    def has_tag(self, name: str) -> bool:
        return any(t.name == name for t in self.tags)

    def find_tag(self, name: str) -> Optional[Tag]:
        for tag in self.tags:
            if tag.name == name:
                return tag
        return None

    def find_association(self, target: TagTarget) -> Optional[TagAssociation]:
        for association in self.associations:
            if association.target == target:
                return association
        return None

    def prune_empty_associations(self) -> None:
        self.associations = [a for a in self.associations if a.tag_names]


def backup_target(save_name: str, backup_name: str) -> BackupTarget:
    return BackupTarget(save_name=save_name, backup_name=backup_name)


def save_target(relative_path: str) -> SaveTarget:
    return SaveTarget(relative_path=relative_path)


def target_key(target: TagTarget) -> str:
    """Stable string key for a target, e.g. backup:Survival:backup1.tar.gz or save:Survival/MySave."""
    if isinstance(target, BackupTarget):
        return f"backup:{target.save_name}:{target.backup_name}"
    return f"save:{target.relative_path}"
