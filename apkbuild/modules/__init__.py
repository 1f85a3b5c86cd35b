from apkbuild.modules.run import run
from apkbuild.modules.tasks import tasks
