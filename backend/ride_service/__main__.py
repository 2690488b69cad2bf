from ride_service.main import run

run()
