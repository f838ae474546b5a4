from domainstatus.server import run

run()
