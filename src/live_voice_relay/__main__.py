from live_voice_relay.main import main

if __name__ == "__main__":
    main()
