pytest_plugins = ["understudy.plugin", "pytester"]
