import sys
import platform
from enum import Enum
from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText

class ReturnCode(Enum):
    SUCCESS = 0
    USER_EXIT = 1
    DB_DRIVER_ERROR = 2
    DATABASE_CONNECTION_ERROR = 3
    RENDER_ERROR = 4
    TERMINAL_IO_ERROR = 5
    CONFIG_FILE_FORMAT_ERROR = 6
    CONFIG_VALIDATION_ERROR = 7

errorMsgDict = {
    0 : '',
    1 : '\nThank you for using SQLPANE!\n',
    2 : 'Error/exception thrown by {0} driver:\n{1}',
    3 : 'Database connection error: {0}, {1}',
    4 : 'Cannot display column "{0}": {1}',
    5 : 'Terminal I/O error: {0}',
    6 : 'Formatting error with config file {0}.',
    7 : 'Errors in config file {0}:\n{1}',
    }

class PaneError(Exception):
    '''
    Base class of all SQLPANE errors. The message is built from the template
    table above so every error reads the same wherever it is shown.
    '''
    returnCode = ReturnCode.SUCCESS

    def __init__(self, *args, msgOverride=''):
        template = errorMsgDict[self.returnCode.value]
        self.message = msgOverride or (template.format(*args) if args else template)
        super().__init__(self.message)

class EngineError(PaneError):
    returnCode = ReturnCode.DB_DRIVER_ERROR

class DatabaseConnectionError(PaneError):
    returnCode = ReturnCode.DATABASE_CONNECTION_ERROR

class RenderError(PaneError):
    returnCode = ReturnCode.RENDER_ERROR

class TerminalIOError(PaneError):
    returnCode = ReturnCode.TERMINAL_IO_ERROR

class SettingsError(PaneError):
    returnCode = ReturnCode.CONFIG_FILE_FORMAT_ERROR

class SettingsValidationError(SettingsError):
    returnCode = ReturnCode.CONFIG_VALIDATION_ERROR


def engineErrorFromException(exc, dialect):
    '''
    Wraps an exception raised by SQLAlchemy or the DBAPI driver underneath it.
    Only the driver's own diagnostic is kept: the SQLAlchemy wrapper text
    repeats the statement and a documentation link, which is noise in a pane.
    '''
    from sqlalchemy.exc import DBAPIError, StatementError

    if isinstance(exc, DBAPIError) and exc.orig is not None:
        detail = str(exc.orig)
    elif isinstance(exc, StatementError) and exc.orig is not None:
        detail = str(exc.orig)
    else:
        detail = str(exc) or type(exc).__name__
    return EngineError(dialect or 'database', detail.strip())


def doExit(returnCode=ReturnCode.USER_EXIT, msg=None, outputStream=None):
    '''
    Writes the closing message and ends the process. A USER_EXIT is a
    clean exit; anything else exits with the code's value.
    '''
    outputStream = outputStream or sys.stdout
    msg = msg if msg is not None else errorMsgDict[returnCode.value]

    if msg:
        if outputStream.isatty():
            if returnCode == ReturnCode.USER_EXIT:
                color = 'green' if platform.system() == 'Windows' else 'lightgreen'
            else:
                color = 'red'
            print_formatted_text(FormattedText([(color, msg)]), file=outputStream)
        else:
            print(msg, file=outputStream)

    sys.exit(0 if returnCode in (ReturnCode.SUCCESS, ReturnCode.USER_EXIT)
                 else returnCode.value)
