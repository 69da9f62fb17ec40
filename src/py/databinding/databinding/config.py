USERS_ENDPOINT = "https://jsonplaceholder.typicode.com/users"

# Broadcast channel names
USERS_LOADING = "users_loading"
USERS_DID_UPDATE = "users_did_update"
USERS_DID_FAIL = "users_did_fail"
