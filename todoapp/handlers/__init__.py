# Importing the handler modules registers them with the mediator
from . import users, tasks, subtasks
