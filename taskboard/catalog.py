# taskboard/catalog.py
from typing import Tuple

from .models import TaskTemplate

# Recurring grant-administration work a caseworker draws a month from.
TASK_TEMPLATES: Tuple[TaskTemplate, ...] = (
    TaskTemplate("Review expense rendition for the 'Local Enterprise' project", 3),
    TaskTemplate("Prepare weekly progress report for management", 4),
    TaskTemplate("Field supervision visit to the 'My Neighbourhood' project", 6),
    TaskTemplate("Train participants of the 'I Work' programme", 8),
    TaskTemplate("Answer administrative emails and enquiries", 2),
    TaskTemplate("Plan next week's activities", 3),
    TaskTemplate("Coordination meeting with the regional team", 2),
    TaskTemplate("Draft technical terms for the 'Action' programme tender", 8),
    TaskTemplate("Evaluate 5 applications for 'Social Innovation' projects", 5),
    TaskTemplate("Digitise case files of 3 closed agreements", 4),
    TaskTemplate("Attend inter-agency coordination meeting (municipality)", 3),
    TaskTemplate("Phone follow-up with 10 participants", 2),
    TaskTemplate("Eligibility review of new proposals", 7),
    TaskTemplate("Prepare quarterly results presentation", 5),
    TaskTemplate("Update the project management system", 2),
    TaskTemplate("Closing workshop with 'Family Support' participants", 6),
    TaskTemplate("Review a project's budget and cash flow", 3),
    TaskTemplate("Write minutes of the team meeting", 1),
    TaskTemplate("Summarise satisfaction survey results", 4),
    TaskTemplate("Arrange purchase of training supplies", 2),
)
