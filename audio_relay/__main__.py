from audio_relay.server import main

main()
