"""machine-sync command-line tool"""
