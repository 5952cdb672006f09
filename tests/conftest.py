import os
import tempfile

# Both have to be in place before anything under countup is imported: paths and log files are set up at import time,
# and Qt picks its platform plugin when the first QApplication is built.
os.environ.setdefault("COUNTUP_DATA_DIR", tempfile.mkdtemp(prefix="countup-tests-"))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
