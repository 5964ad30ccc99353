from sqlpane.appSettings import AppSettings
from sqlpane.controlLoop import ControlLoop
from sqlpane.databaseConnection import openInMemory
from sqlpane.errorManager import PaneError, ReturnCode, doExit
from sqlpane.paneScreen import PaneScreen
from sqlpane.queryExecutor import QueryExecutor
from sqlpane.resultRenderer import ResultRenderer

def createControlLoop(settings):
    '''
    Opens the session's one engine connection and wires the components
    together. The returned loop owns the connection through its executor.
    '''
    executor = QueryExecutor(openInMemory(settings.connectionString),
                             batchSize=settings.batchSize)
    renderer = ResultRenderer(nullMarker=settings.nullMarker,
                              tableFormat=settings.tableFormat)
    return ControlLoop(executor, renderer)

def main():
    '''
    Main entry point for SQLPANE. There are no command line options: the
    session starts at once and ends with "q".
    '''
    try:
        settings = AppSettings().loadSettings()
        controlLoop = createControlLoop(settings)
    except PaneError as e:
        doExit(e.returnCode, e.message)

    # The terminal is released by the time run() returns or raises;
    # the connection is closed here on every path.
    try:
        PaneScreen(controlLoop, editingStyle=settings.editingStyle).run()
    except PaneError as e:
        doExit(e.returnCode, e.message)
    finally:
        controlLoop.executor.close()

    doExit(ReturnCode.USER_EXIT)

# Main entry point.
if __name__ == '__main__':
    main()
