import os
from configobj import ConfigObj, ConfigObjError, flatten_errors
from validate import Validator, VdtValueError, VdtTypeError, VdtValueTooLongError, \
        VdtValueTooShortError, VdtValueTooBigError, VdtValueTooSmallError

from sqlpane import paneEnv as env
from sqlpane.errorManager import SettingsError, SettingsValidationError

# The configspec is kept in code: SQLPANE has no install-time data directory.
configSpec = '''
[Settings]
connectionString = string(default='duckdb:///:memory:')
batchSize = integer(min=1, default=1024)
nullMarker = string(default='NULL')
tableFormat = option('psql', 'grid', 'simple', 'github', 'pipe', 'orgtbl', default='psql')
editingStyle = string(default='fg:yellow')
'''.splitlines()


class AppSettings():
    '''
    The AppSettings class holds the SQLPANE program settings. They are read
    from a user-chosen file (see paneEnv.settingsFilePath()); any setting
    missing from the file, or the whole file, falls back on the defaults in
    the configspec above. One instance is created by main() and handed to
    whoever needs it.
    '''

    def __init__(self):
        self._settings = None
        self.settingsFile = None

    @property
    def settings(self):
        return self._settings['Settings']

    @property
    def connectionString(self):
        return self.settings['connectionString']

    @property
    def batchSize(self):
        return self.settings['batchSize']

    @property
    def nullMarker(self):
        return self.settings['nullMarker']

    @property
    def tableFormat(self):
        return self.settings['tableFormat']

    @property
    def editingStyle(self):
        return self.settings['editingStyle']

    def loadSettings(self, settingsFile=None):
        '''
        Reads the settings from disk and validates them. Raises SettingsError
        on unreadable files and SettingsValidationError on bad values.
        '''
        settingsFile = settingsFile or env.settingsFilePath()
        self.settingsFile = settingsFile

        try:
            if os.path.isfile(settingsFile):
                self._settings = ConfigObj(settingsFile, configspec=configSpec,
                        file_error=True, encoding='utf-8')
            else:
                # No file: an empty config still picks up every default
                self._settings = ConfigObj(configspec=configSpec, encoding='utf-8')
        except (ConfigObjError, IOError):
            raise SettingsError(settingsFile)

        results = self._settings.validate(Validator(), preserve_errors=True, copy=True)
        if results is not True:
            raise SettingsValidationError(settingsFile, self._describeFailures(results))
        return self

    def _describeFailures(self, results):
        msg = 'Validation failures:\n'
        for (section_list, key, error) in flatten_errors(self._settings, results):
            section_path = '.'.join(section_list)

            if key is None:
                msg += '  Missing section: {}\n'.format(section_path)
                continue

            if error is False:
                msg += '  Missing value: {}[{}]\n'.format(section_path, key)
                continue

            # Walk the section_list to get the datum
            d = self._settings
            for s in section_list:
                d = d[s]

            if isinstance(error, VdtTypeError):
                desc = 'Incorrect data type'
            elif type(error) is VdtValueError:
                desc = 'Invalid option choice'
            elif isinstance(error, (VdtValueTooLongError, VdtValueTooShortError)):
                desc = 'String length outside legal range'
            elif isinstance(error, (VdtValueTooBigError, VdtValueTooSmallError)):
                desc = 'Numeric value is outside legal range'
            else:
                desc = 'Invalid value'

            msg += '  {}: {}[{}] = {} (error = {})\n'.format(desc, section_path, key, d[key], error)
        return msg
