from track_routing.server import main

main()
