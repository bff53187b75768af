import uuid

import pytest

from pixelforge import models
from pixelforge.schemas import CurrentUser, Role
from pixelforge.services import access


def _user(role: Role) -> CurrentUser:
    return CurrentUser(id=uuid.uuid4(), username=f"{role.value}-user", role=role)


def _project(creator_id: uuid.UUID, member_ids: list[uuid.UUID] = ()) -> models.Project:
    project = models.Project(id=uuid.uuid4(), name="P", created_by_user_id=creator_id)
    project.memberships = [
        models.ProjectMember(project_id=project.id, user_id=member_id) for member_id in member_ids
    ]
    return project


def test_admin_can_access_any_project():
    admin = _user(Role.ADMIN)
    assert access.can_access_project(admin, _project(uuid.uuid4()))


@pytest.mark.parametrize("role", list(Role))
def test_creator_can_access_project(role: Role):
    user = _user(role)
    assert access.can_access_project(user, _project(user.id))


@pytest.mark.parametrize("role", list(Role))
def test_member_can_access_project(role: Role):
    user = _user(role)
    assert access.can_access_project(user, _project(uuid.uuid4(), [uuid.uuid4(), user.id]))


@pytest.mark.parametrize("role", [Role.PROJECT_LEAD, Role.DEVELOPER])
def test_outsider_is_denied(role: Role):
    user = _user(role)
    assert not access.can_access_project(user, _project(uuid.uuid4(), [uuid.uuid4()]))


@pytest.mark.parametrize(
    "role, allowed, expected",
    [
        (Role.ADMIN, {Role.ADMIN}, True),
        (Role.PROJECT_LEAD, {Role.ADMIN}, False),
        (Role.DEVELOPER, {Role.ADMIN}, False),
        (Role.PROJECT_LEAD, {Role.ADMIN, Role.PROJECT_LEAD}, True),
        (Role.DEVELOPER, {Role.ADMIN, Role.PROJECT_LEAD}, False),
        (Role.DEVELOPER, set(Role), True),
    ],
)
def test_has_role(role: Role, allowed: set[Role], expected: bool):
    assert access.has_role(_user(role), allowed) is expected
