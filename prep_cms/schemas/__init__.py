# __init__.py
from prep_cms.schemas.common import DataResponse, OptionItem, Page, ShelvedUpdate, SuccessResponse
from prep_cms.schemas.navigation import NavigationResponse, NavSubject, NavSubtopic, NavTopic
from prep_cms.schemas.preferences import (
	ClientPreferences,
	ClientPreferencesResponse,
	ClientPreferencesUpdate,
	ReaderSettings,
	ReaderSettingsUpdate,
)
from prep_cms.schemas.subject import SubjectCounts, SubjectDetail, SubjectForm, SubjectListItem, SubjectOut, TopicSummary
from prep_cms.schemas.subtopic import SubtopicForm, SubtopicOption, SubtopicOut, SubtopicWithParents
from prep_cms.schemas.topic import TopicForm, TopicOption, TopicOut, TopicWithSubject

__all__ = [
	"DataResponse",
	"OptionItem",
	"Page",
	"ShelvedUpdate",
	"SuccessResponse",
	"NavigationResponse",
	"NavSubject",
	"NavSubtopic",
	"NavTopic",
	"ClientPreferences",
	"ClientPreferencesResponse",
	"ClientPreferencesUpdate",
	"ReaderSettings",
	"ReaderSettingsUpdate",
	"SubjectCounts",
	"SubjectDetail",
	"SubjectForm",
	"SubjectListItem",
	"SubjectOut",
	"TopicSummary",
	"SubtopicForm",
	"SubtopicOption",
	"SubtopicOut",
	"SubtopicWithParents",
	"TopicForm",
	"TopicOption",
	"TopicOut",
	"TopicWithSubject",
]
