from tweetwatch.main import main

main()
