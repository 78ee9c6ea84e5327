from chordvery.main import run

run()
