"""Collection and singleton document names in the document store."""

STUDENTS = "students"
EVENTS = "events"
PAID_LESSONS = "paidLessons"
STUDENT_NOTES = "studentNotes"
ANNOUNCEMENTS = "announcements"
SETTINGS = "settings"

CURRENT_ANNOUNCEMENT_ID = "current"
APP_SETTINGS_ID = "appSettings"
