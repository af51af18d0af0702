# __init__.py
from prep_cms.models.preferences import ClientPreferencesModel
from prep_cms.models.subject import Subject
from prep_cms.models.subtopic import Subtopic
from prep_cms.models.topic import Topic

__all__ = [
	"ClientPreferencesModel",
	"Subject",
	"Subtopic",
	"Topic",
]
