# command-line front end for GameGrind lookups
