import logging
import os
import tempfile

from romsift.monitor import setup_monitoring, log_event, monitor, LOGGER_NAME


def _detach(logger, logfile):
    target = os.path.abspath(logfile)
    for h in list(logger.handlers):
        if getattr(h, 'baseFilename', None) == target:
            h.close()
            logger.removeHandler(h)


def test_monitor_writes_event_to_file():
    with tempfile.TemporaryDirectory() as tmp:
        logfile = os.path.join(tmp, 'events.log')

        logger = setup_monitoring(log_file=logfile, echo=False)
        try:
            log_event('test.event', 'monitor alive')
            monitor.warning('presets', 'category message')

            for h in logger.handlers:
                h.flush()

            with open(logfile, 'r', encoding='utf-8') as f:
                content = f.read()
        finally:
            _detach(logger, logfile)

        assert 'test.event | monitor alive' in content
        assert 'WARNING' in content
        assert '[presets] category message' in content


def test_setup_monitoring_does_not_duplicate_handlers():
    with tempfile.TemporaryDirectory() as tmp:
        logfile = os.path.join(tmp, 'events.log')

        logger = setup_monitoring(log_file=logfile)
        try:
            before = len(logger.handlers)
            setup_monitoring(log_file=logfile)
            assert len(logger.handlers) == before
            assert logger is logging.getLogger(LOGGER_NAME)
        finally:
            _detach(logger, logfile)
