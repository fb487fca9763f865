import logging

import structlog

# debug-подія на кожну вставку - у тестах лише попередження
structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING))
