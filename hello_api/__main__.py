from hello_api.main import run

run()
