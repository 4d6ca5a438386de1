"""Infrastructure modules for QM Bot.

- commands: recursive parameter commands, registry, parser and Slack provider
- messaging: message clients and the message locator
- operations: operation results and error classification
- tasks: task list messages and the task runner
"""
