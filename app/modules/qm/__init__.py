"""QM module - chat commands backed by Gluon.

- registry: command registry shared by the slash command and interactions
- setters: recursive parameter setters
- commands: help, DevOps environment, team projects and project environments
- tasks: tasks run when requesting project environments
"""
