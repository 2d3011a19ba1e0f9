"""GraphQL documents that do not depend on the delegation scheme."""

DELEGATE_VOTES_AND_PROPOSALS = """query DelegateVotesAndProposals($delegates: [String]!, $space: String!) {
  votes(
    first: 1000
    orderBy: "created"
    orderDirection: desc
    where: { voter_in: $delegates, space: $space }
  ) {
    voter
    created
    choice
    vp
  }
  proposals(
    first: 1000
    orderBy: "created"
    orderDirection: desc
    where: { author_in: $delegates, space: $space }
  ) {
    author
    created
    title
  }
}"""

ENS_RESOLVED_ADDRESS = """query ResolveName($name: String!) {
  domains(where: { name: $name }, first: 1) {
    resolvedAddress {
      id
    }
  }
}"""
