import os
import platform

# Read the environment. Nothing here is cached at import time so that
# tests can monkeypatch the variables.

def homeDirectory():
    homeVariable = 'USERPROFILE' if platform.system() == 'Windows' else 'HOME'
    return os.getenv(homeVariable, os.path.expanduser('~'))

def settingsFilePath():
    '''
    $SQLPANE_CONFIG wins; otherwise the per-user file in the home directory.
    '''
    return os.getenv('SQLPANE_CONFIG') or os.path.join(homeDirectory(), '.sqlpanerc')
