from ...core.resources import ResourceService


class ProjectService(ResourceService):
    """Portfolio projects: title, description, image and target URL."""

    collection = 'projects'
    label = 'Project'
    required_fields = ('title', 'projectUrl')
    editable_fields = ('title', 'description', 'projectUrl')
    blob_folder = 'projects'
    blob_field = 'image'

    def defaults(self):
        return {'description': '', 'image': ''}
