from chat_admin.main import run

run()
