from app.crud.base import OwnedRecordStore
from app.models.project import Project
from app.schemas.project import ProjectCreate, ProjectUpdate


class CRUDProject(OwnedRecordStore[Project, ProjectCreate, ProjectUpdate]):
    label = "Project"
    create_schema = ProjectCreate
    update_schema = ProjectUpdate


project_crud = CRUDProject(Project)
