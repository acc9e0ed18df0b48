COMMAND_NAME = 'package-command'
