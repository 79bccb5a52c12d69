import os
import tempfile

# Keep logs, presets and settings of the test run out of the real home directory
os.environ.setdefault('ROMSIFT_HOME', tempfile.mkdtemp(prefix='romsift-tests-'))
