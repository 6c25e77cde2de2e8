class PressureManagementException(Exception):
    pass


class ConfigurationError(PressureManagementException):
    pass


class HydraulicSolverError(PressureManagementException):
    pass
