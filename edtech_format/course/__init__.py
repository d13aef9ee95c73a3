# Course domain: data types, collaborator ports and reference implementations.
