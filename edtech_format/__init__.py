"edtech course format"
