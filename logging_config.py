class LoggingFlags:
    """Console logging switches for the simulator"""

    # Run-level flags
    CYCLE_PROGRESS = False
    LOADING = False

    # Per-cycle event flags
    ARRIVALS = False
    DISPATCH = False
    COMPLETIONS = False

    @classmethod
    def enable_all_debug(cls):
        """Enable all debug flags"""
        for attr in dir(cls):
            if not attr.startswith('_') and attr.isupper():
                setattr(cls, attr, True)

    @classmethod
    def disable_all_debug(cls):
        """Disable all debug flags except loading"""
        for attr in dir(cls):
            if not attr.startswith('_') and attr.isupper():
                if attr != 'LOADING':
                    setattr(cls, attr, False)

    @classmethod
    def set_production_mode(cls):
        """Set flags for a plain run (only load messages and completions)"""
        cls.disable_all_debug()
        cls.LOADING = True
        cls.COMPLETIONS = True


def log_if(flag: bool, message: str, *args, **kwargs):
    """Print message only if flag is True"""
    if flag:
        print(message, *args, **kwargs)
